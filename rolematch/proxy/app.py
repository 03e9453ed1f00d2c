"""Pass-through proxy for the upstream matched-candidates endpoint.

Browsers cannot call the upstream API directly because it sends no CORS
headers. This relay forwards ``roleId`` unchanged and adds permissive CORS
headers to every response.
"""

from typing import Any

import requests
from flask import Flask, Response, jsonify, request
from flask_cors import CORS

from ..core.config.loader import load_config
from ..observability.logger import get_logger

logger = get_logger(__name__)

DEFAULT_UPSTREAM = "http://paraform.com/api/cron/role/get_matched_candidates"
MISSING_ROLE_ID = "Missing 'roleId' query parameter"


def _decode(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def create_app(config: dict[str, Any] | None = None, session: requests.Session | None = None) -> Flask:
    """Build the proxy application.

    Args:
        config: Loaded configuration (defaults to ``load_config()``)
        session: HTTP session used for upstream calls
    """
    config = config if config is not None else load_config()
    proxy_config = config.get("proxy", {})
    upstream = proxy_config.get("upstream", DEFAULT_UPSTREAM)
    upstream_param = proxy_config.get("param", "role_id")
    timeout = proxy_config.get("timeout", 30)
    http = session or requests.Session()

    app = Flask(__name__)
    CORS(
        app,
        resources={r"/api/*": {"origins": proxy_config.get("origins", "*")}},
        methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.route("/api/getMatchedCandidates", methods=["GET", "OPTIONS"])
    def get_matched_candidates():
        if request.method == "OPTIONS":
            return "", 200

        role_id = request.args.get("roleId")
        if not role_id:
            return jsonify({"error": MISSING_ROLE_ID}), 400

        try:
            upstream_response = http.get(
                upstream,
                params={upstream_param: role_id},
                headers={"Content-Type": "application/json"},
                timeout=timeout,
            )
        except requests.RequestException as e:
            logger.error("upstream_request_failed", role_id=role_id, error=str(e))
            return jsonify({"error": "Internal server error"}), 500

        body = _decode(upstream_response)
        status = upstream_response.status_code

        if not upstream_response.ok:
            logger.error("upstream_error_status", role_id=role_id, status=status)
            return jsonify({"error": body}), status

        logger.info("upstream_relayed", role_id=role_id, status=status)
        if isinstance(body, str):
            return Response(body, status=status, mimetype="text/plain")
        return jsonify(body), status

    return app
