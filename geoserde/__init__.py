"""Adapter between geographic feature objects and GIS formats: serializers, sinks and feature readers."""

__version__ = "0.5.2"