import logging
import os

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from .loader import read_environment, try_load
from .networks import network_specs, required_variables

logger = logging.getLogger(__name__)

app = FastAPI(title="Contract Toolchain Configuration")


def _load_result():
    try:
        specs = network_specs()
    except ValueError as exc:
        logger.warning("Invalid extra network configuration: %s", exc)
        return None, str(exc)
    return try_load(networks=specs), None


@app.get("/api/toolchain")
async def get_toolchain() -> JSONResponse:
    result, error = _load_result()
    if result is None:
        return JSONResponse({"ok": False, "error": error}, status_code=500)

    if result.config is None:
        names = ", ".join(item["variable"] for item in result.missing())
        return JSONResponse(
            {
                "ok": False,
                "error": f"Missing environment variables: {names}",
                "missing": result.missing(),
            },
            status_code=503,
        )

    payload: dict[str, object] = {"ok": True, "config": result.config.to_toolchain_dict()}
    if result.errors:
        payload["missing"] = result.missing()
    return JSONResponse(payload)


@app.get("/api/toolchain/validate")
async def validate_toolchain() -> JSONResponse:
    result, error = _load_result()
    if result is None:
        return JSONResponse(
            {"ok": False, "error": error, "missing": [], "problems": [error]},
            status_code=500,
        )

    problems = result.config.validate_profiles() if result.config is not None else []
    return JSONResponse(
        {
            "ok": result.ok and not problems,
            "missing": result.missing(),
            "problems": problems,
        }
    )


@app.get("/api/networks")
async def get_networks() -> JSONResponse:
    try:
        specs = network_specs()
    except ValueError as exc:
        logger.warning("Invalid extra network configuration: %s", exc)
        return JSONResponse({"ok": False, "error": str(exc)}, status_code=500)

    environ = read_environment(os.environ)
    return JSONResponse(
        {
            "ok": True,
            "networks": [spec.for_client(environ) for spec in specs],
            "requiredVariables": required_variables(specs),
        }
    )
