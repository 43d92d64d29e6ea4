# File: cpb/utils/errors.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.0
# Status: stable
# Date: 2026-10-19
# Purpose: Errores tipados del proyecto.
from __future__ import annotations


class CpbError(Exception):
    """Error base del proyecto."""


class CpbValidationError(CpbError):
    """Error de validación (configuración/archivo/estructura)."""


class CpbIOError(CpbError):
    """Error de E/S (lectura/escritura del estado)."""


class CpbSchemaError(CpbValidationError):
    """Error de esquema (.cpb.json) o incompatibilidad de versión."""


class CpbStateError(CpbError):
    """Estado inválido para calcular ángulos (p.ej. max == 0 con política RAISE)."""
