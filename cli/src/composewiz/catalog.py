"""Fixed service and hardware catalogs offered by the wizard."""

from typing import List, Optional, Tuple

from composewiz.models import HardwareProfile, ServiceOption

OLLAMA_TAG = "ollama"

# Caddy, Postgres and Redis are core services with no profile; they always
# run and are therefore not listed here.
SERVICES: Tuple[ServiceOption, ...] = (
    ServiceOption("n8n", "n8n, n8n-worker, n8n-import (Workflow Automation)", True),
    ServiceOption("flowise", "Flowise (AI Agent Builder)", True),
    ServiceOption("monitoring",
                  "Monitoring Suite (Prometheus, Grafana, cAdvisor, Node-Exporter)", True),
    ServiceOption("qdrant", "Qdrant (Vector Database)"),
    ServiceOption("supabase", "Supabase (Backend as a Service)"),
    ServiceOption("langfuse",
                  "Langfuse Suite (AI Observability - includes Clickhouse, Minio)"),
    ServiceOption("open-webui", "Open WebUI (ChatGPT-like Interface)"),
    ServiceOption("searxng", "SearXNG (Private Metasearch Engine)"),
    ServiceOption("crawl4ai", "Crawl4ai (Web Crawler for AI)"),
    ServiceOption("letta", "Letta (Agent Server & SDK)"),
    ServiceOption(OLLAMA_TAG, "Ollama (Local LLM Runner - select hardware in next step)"),
)

DEFAULT_HARDWARE = HardwareProfile.CPU

CORE_SERVICES = ("Caddy", "Postgres", "Redis")


def service_tags() -> List[str]:
    return [svc.tag for svc in SERVICES]


def default_selection() -> List[str]:
    """Tags that are pre-checked in the service checklist."""
    return [svc.tag for svc in SERVICES if svc.default_enabled]


def get_service(tag: str) -> Optional[ServiceOption]:
    for svc in SERVICES:
        if svc.tag == tag:
            return svc
    return None


def checklist_options() -> List[Tuple[str, str, bool]]:
    """Build ``(tag, label, checked)`` rows for the service checklist."""
    return [(svc.tag, svc.description, svc.default_enabled) for svc in SERVICES]


def hardware_options() -> List[Tuple[str, str]]:
    return [(hw.value, hw.description) for hw in HardwareProfile]
