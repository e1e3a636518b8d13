"""Domain layer: entities and value objects of the schedule engine"""
