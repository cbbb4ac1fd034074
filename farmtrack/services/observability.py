"""
Observability — Structured Logging, API Metrics, Error Handling

- JSON-formatted structured logs
- Per-endpoint request/latency metrics
- One error boundary: ApiError → its status, HTTP errors pass through,
  anything else → generic 500
"""

import time
import logging
import json
import traceback
from flask import request, g, jsonify
from werkzeug.exceptions import HTTPException

from farmtrack.database.db import db
from farmtrack.errors import ApiError


class JsonFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record):
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if hasattr(record, 'extra_data'):
            log_data.update(record.extra_data)
        if record.exc_info and record.exc_info[0]:
            log_data['exception'] = traceback.format_exception(*record.exc_info)
        return json.dumps(log_data)


class ApiMetrics:
    """In-memory API metrics collector."""

    def __init__(self):
        self.request_count = {}    # endpoint -> count
        self.error_count = {}      # endpoint -> count
        self.latency_sum = {}      # endpoint -> total ms
        self.latency_max = {}      # endpoint -> max ms

    def record_request(self, endpoint, latency_ms, is_error=False):
        self.request_count[endpoint] = self.request_count.get(endpoint, 0) + 1
        self.latency_sum[endpoint] = self.latency_sum.get(endpoint, 0) + latency_ms
        self.latency_max[endpoint] = max(self.latency_max.get(endpoint, 0), latency_ms)
        if is_error:
            self.error_count[endpoint] = self.error_count.get(endpoint, 0) + 1

    def get_summary(self):
        summary = {}
        for endpoint, count in self.request_count.items():
            errors = self.error_count.get(endpoint, 0)
            summary[endpoint] = {
                'requests': count,
                'errors': errors,
                'avg_latency_ms': round(self.latency_sum.get(endpoint, 0) / count, 2),
                'max_latency_ms': round(self.latency_max.get(endpoint, 0), 2),
                'error_rate_pct': round(errors / count * 100, 1),
            }
        return summary

    def get_totals(self):
        total_requests = sum(self.request_count.values())
        total_errors = sum(self.error_count.values())
        return {
            'total_requests': total_requests,
            'total_errors': total_errors,
            'error_rate_pct': round(total_errors / total_requests * 100, 1) if total_requests > 0 else 0,
        }


def setup_observability(app):
    """
    Configures structured logging, request tracking and error handlers.
    Call this in create_app().
    """
    metrics = ApiMetrics()
    app.extensions['farmtrack.metrics'] = metrics

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO
    app.logger.handlers = [handler]
    app.logger.setLevel(level)

    # Service loggers live under "farmtrack.*"
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(level)

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        latency_ms = (time.time() - g.get('start_time', time.time())) * 1000
        endpoint = request.endpoint or request.path
        is_error = response.status_code >= 400

        metrics.record_request(endpoint, latency_ms, is_error)

        app.logger.info(
            f"{request.method} {request.path} -> {response.status_code} ({latency_ms:.0f}ms)",
            extra={'extra_data': {
                'type': 'request',
                'method': request.method,
                'path': request.path,
                'status': response.status_code,
                'latency_ms': round(latency_ms, 2),
                'ip': request.remote_addr,
            }}
        )
        return response

    @app.errorhandler(ApiError)
    def handle_api_error(e):
        if e.status_code >= 500:
            db.session.rollback()
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({'message': e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        db.session.rollback()
        app.logger.error(
            f"Unhandled exception: {str(e)}",
            exc_info=True,
            extra={'extra_data': {
                'type': 'error',
                'error_class': e.__class__.__name__,
                'path': request.path,
                'method': request.method,
            }}
        )
        return jsonify({'message': 'Internal Server Error'}), 500

    @app.route('/metrics')
    def metrics_endpoint():
        return jsonify({
            'totals': metrics.get_totals(),
            'per_endpoint': metrics.get_summary(),
        })

    return app
