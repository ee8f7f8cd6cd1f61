import logging
import time

from quart import Quart, jsonify, request

from .categories.controller import bp as categories_bp
from .common.config import settings
from .common.database import close_db, init_db
from .common.errors import register_error_handlers
from .products.controller import bp as products_bp

# Prometheus metrics
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST


log = logging.getLogger(__name__)

# Basic metrics with proper buckets for latency
REQUEST_COUNT = Counter("http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"])
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0, float("inf"))
)

PAGING_HEADERS = "X-Total-Count, X-Page-Number, X-Page-Size"


def _metrics_endpoint() -> str:
    # Route templates keep label cardinality bounded (/api/products/<uuid:product_id>).
    rule = request.url_rule
    return rule.rule if rule is not None else "unmatched"


def create_app() -> Quart:
    app = Quart(__name__)

    # Blueprints
    app.register_blueprint(products_bp)
    app.register_blueprint(categories_bp)

    register_error_handlers(app)

    @app.before_request
    async def before_request():
        # Store start time
        request._start_time = time.time()
        # Log instance handling the request
        log.info("[Instance %s] %s %s", settings.INSTANCE_ID, request.method, request.path)

    @app.after_request
    async def after_request(response):
        try:
            if hasattr(request, "_start_time"):
                duration = time.time() - request._start_time
                endpoint = _metrics_endpoint()

                REQUEST_LATENCY.labels(endpoint=endpoint).observe(duration)
                REQUEST_COUNT.labels(
                    method=request.method,
                    endpoint=endpoint,
                    status=str(response.status_code)
                ).inc()
        except Exception:
            log.exception("Error recording metrics")

        response.headers["X-Instance-ID"] = settings.INSTANCE_ID
        response.headers["Access-Control-Expose-Headers"] = PAGING_HEADERS
        return response

    @app.get("/metrics")
    async def metrics():
        data = generate_latest()
        return app.response_class(data, mimetype=CONTENT_TYPE_LATEST)

    @app.get("/health")
    async def health():
        return jsonify({"status": "ok"})

    @app.before_serving
    async def startup():
        logging.basicConfig(level=settings.LOG_LEVEL)
        log.info("Initializing database...")
        await init_db()
        log.info("Database ready.")

    @app.after_serving
    async def shutdown():
        await close_db()
        log.info("Shutdown complete.")

    return app
