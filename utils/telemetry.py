"""Telemetry bootstrap helpers for OpenTelemetry tracing."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import import_module
from typing import Dict, Mapping, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import (
    ALWAYS_OFF,
    ALWAYS_ON,
    ParentBased,
    Sampler,
    TraceIdRatioBased,
)

LOGGER = logging.getLogger("risk_questionnaire.telemetry")

TRACER_NAME = "risk_questionnaire"

_INITIALISED = False


@dataclass(frozen=True)
class OtlpConfig:
    """Structured configuration for the OTLP HTTP exporter."""

    endpoint: str
    headers: Mapping[str, str] | None = None
    timeout: int | None = None


def _parse_headers(raw: str | None) -> Dict[str, str]:
    """Parse comma-separated OTLP headers into a dictionary."""

    headers: Dict[str, str] = {}
    if not raw:
        return headers
    for fragment in raw.split(","):
        if "=" not in fragment:
            continue
        key, value = fragment.split("=", 1)
        key = key.strip()
        if not key:
            continue
        headers[key] = value.strip()
    return headers


def _coerce_ratio(raw: str, *, default: float) -> float:
    """Convert ``raw`` to a float ratio within [0.0, 1.0]."""

    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        LOGGER.warning("Invalid OTEL_TRACES_SAMPLER_ARG '%s'; using default %.2f", raw, default)
        return default
    return max(0.0, min(1.0, value))


def _build_sampler() -> Sampler:
    """Create a sampler based on environment configuration."""

    sampler_name = os.getenv("OTEL_TRACES_SAMPLER", "").strip().lower()
    sampler_arg = os.getenv("OTEL_TRACES_SAMPLER_ARG", "").strip()

    if sampler_name in {"", "parentbased_traceidratio"}:
        return ParentBased(TraceIdRatioBased(_coerce_ratio(sampler_arg, default=1.0)))
    if sampler_name == "traceidratio":
        return TraceIdRatioBased(_coerce_ratio(sampler_arg, default=1.0))
    if sampler_name == "always_on":
        return ALWAYS_ON
    if sampler_name == "always_off":
        return ALWAYS_OFF

    LOGGER.warning("Unknown OTEL_TRACES_SAMPLER '%s'; defaulting to parentbased_traceidratio", sampler_name)
    return ParentBased(TraceIdRatioBased(1.0))


def _build_otlp_config() -> OtlpConfig | None:
    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "").strip()
    if not endpoint:
        return None
    timeout: Optional[int] = None
    timeout_raw = os.getenv("OTEL_EXPORTER_OTLP_TIMEOUT", "").strip()
    if timeout_raw:
        try:
            timeout = int(float(timeout_raw))
        except ValueError:
            LOGGER.warning("Invalid OTEL_EXPORTER_OTLP_TIMEOUT '%s'; ignoring", timeout_raw)
    headers = _parse_headers(os.getenv("OTEL_EXPORTER_OTLP_HEADERS")) or None
    return OtlpConfig(endpoint=endpoint, headers=headers, timeout=timeout)


def _create_exporter() -> Optional[SpanExporter]:
    """Return the configured span exporter, or ``None`` when tracing has nowhere to go."""

    config = _build_otlp_config()
    if config is not None:
        try:
            module = import_module("opentelemetry.exporter.otlp.proto.http.trace_exporter")
        except ImportError:
            LOGGER.warning("OTLP endpoint configured but opentelemetry-exporter-otlp-proto-http is not installed")
        else:
            return module.OTLPSpanExporter(
                endpoint=config.endpoint,
                headers=dict(config.headers) if config.headers else None,
                timeout=config.timeout,
            )
    if os.getenv("OTEL_CONSOLE_EXPORTER", "").strip().lower() in {"1", "true", "yes", "on"}:
        return ConsoleSpanExporter()
    return None


def setup_tracing(*, force: bool = False) -> None:
    """Configure the global tracer provider if telemetry is enabled."""

    global _INITIALISED
    if _INITIALISED and not force:
        return

    enabled_flag = os.getenv("OTEL_TRACES_ENABLED", "1").strip().lower()
    if enabled_flag in {"0", "false", "off"}:
        LOGGER.info("Telemetry disabled via OTEL_TRACES_ENABLED")
        return

    exporter = _create_exporter()
    if exporter is None:
        LOGGER.debug("No span exporter configured; skipping telemetry bootstrap")
        return

    service_name = os.getenv("OTEL_SERVICE_NAME", "risk-questionnaire")
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}), sampler=_build_sampler())
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    _INITIALISED = True
    LOGGER.info("OpenTelemetry tracing initialised for service '%s'", service_name)


def get_tracer() -> trace.Tracer:
    """Return the tracer used for questionnaire spans (no-op until configured)."""

    return trace.get_tracer(TRACER_NAME)


__all__ = ["OtlpConfig", "get_tracer", "setup_tracing"]
