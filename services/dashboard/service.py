"""Dashboard Service - serves the service links page for the requesting host."""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))


from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
from typing import Dict, Optional
import time

from servicedash import config as directory_config
from servicedash.config import DEFAULT_DIRECTORY, ServiceDirectory
from servicedash.page import sync_page
from servicedash.utils.logger import ServiceLogger
from servicedash.utils.metrics import MetricsCollector

from services.dashboard import config

app = FastAPI(title="Service Dashboard")

# Initialize logger and metrics
logger = ServiceLogger(config.SERVICE_NAME, level=config.LOG_LEVEL, log_dir=config.LOG_DIR or None)
metrics = MetricsCollector(config.SERVICE_NAME)

TEMPLATE = Path(config.TEMPLATE_PATH).read_text(encoding="utf-8")
logger.info(f"Dashboard service starting up on port {config.PORT}", template=config.TEMPLATE_PATH)


class ServiceURLResponse(BaseModel):
    service: str
    port: int
    url: str


class ServiceListResponse(BaseModel):
    host: str
    services: Dict[str, str]


def directory_for(request: Request) -> ServiceDirectory:
    """Directory bound to the hostname the page was requested on."""
    return DEFAULT_DIRECTORY.with_host(request.url.hostname)


@app.get("/", response_class=HTMLResponse)
def get_dashboard(request: Request):
    """Serve the dashboard with its service links pointed at this host."""
    start_time = time.time()
    metrics.increment("page_views_total")

    directory = directory_for(request)
    page, report = sync_page(TEMPLATE, directory)

    elapsed_ms = (time.time() - start_time) * 1000
    metrics.increment("links_rewritten_total", report.rewritten)
    metrics.timing("sync_duration", elapsed_ms)
    if report.unresolved:
        logger.warning(f"{report.unresolved} dashboard links name unknown services", host=directory.host)
    logger.debug(f"Rewrote {report.rewritten} links for {directory.host} ({elapsed_ms:.1f}ms)")
    return page


@app.get("/api/services", response_model=ServiceListResponse)
def list_services(request: Request):
    directory = directory_for(request)
    return ServiceListResponse(host=directory.host, services=directory.urls())


@app.get("/api/services/{service_name}", response_model=ServiceURLResponse)
def get_service(service_name: str, request: Request):
    metrics.increment("lookups_total")
    directory = directory_for(request)
    url = directory.get_service_url(service_name)
    if not url:
        metrics.increment("lookup_misses_total")
        raise HTTPException(status_code=404, detail=f"Service {service_name} not found")
    return ServiceURLResponse(
        service=service_name.lower(),
        port=directory.lookup_port(service_name),
        url=url,
    )


@app.get("/health")
def health():
    return {"status": "ok", "service": config.SERVICE_NAME}


@app.get("/logs")
def get_logs(limit: int = 100):
    """Get recent logs from this service and the service directory."""
    entries = logger.get_recent_logs(limit=limit) + directory_config.logger.get_recent_logs(limit=limit)
    entries.sort(key=lambda entry: entry["timestamp"])
    return entries[-limit:]


@app.get("/metrics")
def get_metrics(period: Optional[int] = None):
    """Get metrics from this service."""
    return metrics.get_all_metrics(time_period_minutes=period)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
