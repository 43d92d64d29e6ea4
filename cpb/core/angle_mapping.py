# File: cpb/core/angle_mapping.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.0
# Status: stable
# Date: 2026-10-19
# Purpose: Estrategia de ángulos inyectable (reemplaza el mapeo lineal por defecto).
# Notes: None = mapeo por defecto. Nunca hay dos activos a la vez.
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, runtime_checkable

from cpb.utils.errors import CpbValidationError

AngleFn = Callable[[float], float]


@runtime_checkable
class AngleProvider(Protocol):
    """Contrato mínimo de un mapeo custom.

    `percent` = progress / max. Los valores devueltos no se validan.
    """

    def progress_angle(self, percent: float) -> float:  # pragma: no cover (protocol)
        ...

    def start_angle(self, percent: float) -> float:  # pragma: no cover (protocol)
        ...


# Variante "Default": sin mapeo custom.
DEFAULT_MAPPING: Optional[AngleProvider] = None


@dataclass(frozen=True)
class CustomAngleMapping:
    """Adapta dos funciones sueltas al protocolo AngleProvider.

    Ejemplo (media vuelta fija desde las 3 en punto):
        CustomAngleMapping(progress_angle=lambda p: p * 180, start_angle=lambda p: 0)
    """

    progress_fn: AngleFn
    start_fn: AngleFn

    def __init__(self, progress_angle: AngleFn, start_angle: AngleFn) -> None:
        if not callable(progress_angle) or not callable(start_angle):
            raise CpbValidationError("CustomAngleMapping: se esperan dos callables")
        object.__setattr__(self, "progress_fn", progress_angle)
        object.__setattr__(self, "start_fn", start_angle)

    def progress_angle(self, percent: float) -> float:
        return float(self.progress_fn(percent))

    def start_angle(self, percent: float) -> float:
        return float(self.start_fn(percent))

    @classmethod
    def from_provider(cls, provider: Any) -> "CustomAngleMapping":
        if not is_angle_provider(provider):
            raise CpbValidationError(f"No implementa progress_angle/start_angle: {provider!r}")
        return cls(progress_angle=provider.progress_angle, start_angle=provider.start_angle)


def is_angle_provider(obj: object) -> bool:
    if obj is None:
        return False
    return callable(getattr(obj, "progress_angle", None)) and callable(getattr(obj, "start_angle", None))


def coerce_mapping(obj: object) -> Optional[AngleProvider]:
    """None -> mapeo por defecto; provider -> tal cual; otra cosa -> CpbValidationError."""
    if obj is None:
        return DEFAULT_MAPPING
    if is_angle_provider(obj):
        return obj  # type: ignore[return-value]
    raise CpbValidationError(f"Mapeo de ángulos inválido: {obj!r}")
