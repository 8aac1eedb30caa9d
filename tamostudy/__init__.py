"""TamoStudy — a virtual pet study companion."""

__version__ = "0.1.0"
