# File: exceptions.py

"""Hierarki exception untuk engine keamanan air."""


class WaterSafetyError(Exception):
    """Base exception untuk semua error di paket airbersih."""


class ConfigurationError(WaterSafetyError):
    """Setup tidak lengkap: standar kualitas air tidak tersedia atau config rusak."""


class ReferenceDataError(WaterSafetyError):
    """File data referensi (standar, pengolahan, penyakit) hilang atau tidak valid."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
