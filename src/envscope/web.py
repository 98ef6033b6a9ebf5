"""FastAPI / Starlette integration.

The hosting application owns the lifecycle; this module only stores the
environment on the app and exposes it to request handlers.

Example:
    from fastapi import Depends, FastAPI
    from envscope import Environment
    from envscope.web import container_config_from_app, inject_property, install_environment

    app = FastAPI()
    app.state.config = {"envscope.environment": "production"}
    install_environment(app, Environment.build(container_config=container_config_from_app(app)))

    @app.get("/mail")
    def mail(host: str = Depends(inject_property("mail.host"))):
        return {"host": host}
"""

from typing import Any, Callable, Dict, Mapping

from fastapi import HTTPException, Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from envscope.binding import resolve_binding
from envscope.environment import MISSING, Environment
from envscope.exceptions import MissingKeyError


def install_environment(app: Any, environment: Environment) -> Environment:
    """Attach ``environment`` to ``app.state``."""
    app.state.environment = environment
    return environment


def container_config_from_app(app: Any) -> Mapping[str, str]:
    """Hosting-container entries from ``app.state.config``, or an empty mapping."""
    config = getattr(app.state, "config", None)
    return dict(config) if config else {}


def get_environment_from_request(request: Request) -> Environment:
    """FastAPI dependency returning the installed environment.

    Raises:
        HTTPException: 500 if ``install_environment`` was never called
    """
    environment = getattr(request.app.state, "environment", None)
    if environment is None:
        raise HTTPException(status_code=500, detail="Environment not installed on application")
    return environment


def inject_property(key: str, default: Any = MISSING) -> Callable[[Request], Any]:
    """Build a FastAPI dependency that resolves one property.

    A missing key without a default is a server misconfiguration, so it
    becomes a 500 response carrying the error details.
    """

    def dependency(request: Request) -> Any:
        environment = get_environment_from_request(request)
        try:
            return resolve_binding(environment, key, default=default)
        except MissingKeyError as e:
            raise HTTPException(status_code=500, detail=e.to_dict()) from e

    return dependency


def create_environment_route(path: str = "/environment") -> Route:
    """Route reporting the active environment name and its source.

    Property values are never exposed.
    """

    async def environment_info(request: Request) -> JSONResponse:
        environment = getattr(request.app.state, "environment", None)
        if environment is None:
            return JSONResponse({"error": "environment not installed"}, status_code=503)
        body: Dict[str, Any] = {
            "environment": str(environment.name),
            "source": environment.source,
        }
        return JSONResponse(body)

    return Route(path, environment_info, methods=["GET"])


__all__ = [
    "install_environment",
    "container_config_from_app",
    "get_environment_from_request",
    "inject_property",
    "create_environment_route",
]
