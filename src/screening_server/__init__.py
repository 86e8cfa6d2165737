"""screening_server — FastAPI REST API for the screening report SDK.

Exposes the ReportPipeline as a stateless HTTP API (report generation,
open-ended and streamed analysis), serves the static assessment content,
and relays live session telemetry over WebSockets.
"""
