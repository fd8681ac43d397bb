"""Irradiance provider interfaces and implementations."""

from .base import IrradianceProvider
from .open_meteo import OpenMeteoIrradianceProvider

__all__ = ["IrradianceProvider", "OpenMeteoIrradianceProvider"]
