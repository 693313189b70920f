"""
Health checks and monitoring with Prometheus metrics
"""
import importlib.util
import time

import psutil
import structlog
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

logger = structlog.get_logger()

# Prometheus metrics
REQUEST_COUNT = Counter('http_requests_total', 'Total HTTP requests', ['method', 'endpoint', 'status'])
REQUEST_DURATION = Histogram('http_request_duration_seconds', 'HTTP request duration', ['method', 'endpoint'])
DOCUMENTS_UPLOADED = Counter('documents_uploaded_total', 'Uploaded documents', ['format', 'status'])
QUESTIONS_GENERATED = Counter('questions_generated_total', 'Generated questions', ['difficulty'])
ANSWERS_EVALUATED = Counter('answers_evaluated_total', 'Evaluated answers', ['difficulty'])

DOCUMENT_READERS = {"pdf": "pypdf", "docx": "docx"}


class HealthChecker:
    def __init__(self):
        self.start_time = time.time()

    def check_document_readers(self) -> dict:
        """Check that the PDF and DOCX decoders are importable"""
        missing = [fmt for fmt, module in DOCUMENT_READERS.items() if importlib.util.find_spec(module) is None]
        if missing:
            logger.error("document_readers_missing", formats=missing)
            return {
                "status": "unhealthy",
                "message": f"Missing decoders for: {', '.join(missing)}"
            }
        return {
            "status": "healthy",
            "message": "PDF and DOCX decoders available"
        }

    def get_system_metrics(self) -> dict:
        """Get system resource metrics"""
        try:
            memory = psutil.virtual_memory()

            return {
                "cpu_percent": psutil.cpu_percent(interval=None),
                "memory_percent": memory.percent,
                "memory_available_gb": round(memory.available / (1024**3), 2),
                "uptime_seconds": time.time() - self.start_time
            }
        except Exception as e:
            logger.error(f"System metrics collection failed: {e}")
            return {"error": str(e)}

    def get_health_status(self) -> dict:
        """Get overall health status"""
        checks = {
            "document_readers": self.check_document_readers(),
        }

        unhealthy_checks = [name for name, check in checks.items() if check["status"] == "unhealthy"]
        overall_status = "healthy" if not unhealthy_checks else "unhealthy"

        return {
            "status": overall_status,
            "timestamp": time.time(),
            "checks": checks,
            "system_metrics": self.get_system_metrics(),
            "unhealthy_components": unhealthy_checks
        }


# Global health checker instance
health_checker = HealthChecker()


def get_metrics():
    """Get Prometheus metrics"""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
