"""
Damage Aid — Post-Disaster Damage Assessment

Walks a user through profile entry, photo upload and damage classification,
then maps the detected damage to repair costs, health risks and contractors.
"""

__version__ = "1.0.0"
