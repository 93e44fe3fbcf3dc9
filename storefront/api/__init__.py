"""
API blueprints for the Springz admin service.
"""
