"""Domain contracts shared by services and infrastructure."""
