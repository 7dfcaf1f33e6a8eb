from __future__ import annotations

from app.core.config import settings
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor


def init_otel(app) -> None:
    if not settings.otel_enabled:
        return

    resource = Resource.create(
        {
            "service.name": settings.api_name,
            "deployment.environment": settings.env,
        }
    )
    provider = TracerProvider(resource=resource)

    # OTEL_EXPORTER_OTLP_* env vars still apply when no endpoint is configured.
    endpoint = settings.otel_otlp_endpoint
    exporter = OTLPSpanExporter(endpoint=endpoint) if endpoint else OTLPSpanExporter()

    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    # Outgoing Open Library calls show up as child spans of the request.
    FastAPIInstrumentor.instrument_app(app)
    HTTPXClientInstrumentor().instrument()
