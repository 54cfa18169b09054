import json
import logging
import sys
from pathlib import Path

import azure.functions as func

app = func.FunctionApp()

# ---------------------------------------------------------------
# 1) 고객 패키지 경로 + src 경로 보장
#    GitHub Actions: pip install --target=".python_packages/lib/site-packages"
# ---------------------------------------------------------------
def _ensure_paths_on_syspath() -> None:
    base_dir = Path(__file__).resolve().parent
    candidates = [
        Path("/home/site/wwwroot/.python_packages/lib/site-packages"),
        base_dir / ".python_packages" / "lib" / "site-packages",
    ]
    lib_dir = base_dir / ".python_packages" / "lib"
    if lib_dir.exists():
        candidates += list(lib_dir.glob("python*/site-packages"))

    for p in candidates:
        if p.exists():
            sp = str(p)
            if sp not in sys.path:
                sys.path.insert(0, sp)
            logging.info(f"Customer site-packages enabled: {sp}")
            break
    else:
        logging.warning("Customer site-packages path not found. Imports may fail.")

    src = base_dir / "src"
    if src.exists() and str(src) not in sys.path:
        sys.path.insert(0, str(src))


_ensure_paths_on_syspath()


def _json_response(payload: dict, status: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(payload, ensure_ascii=False),
        status_code=status,
        mimetype="application/json",
    )


# ---------------------------------------------------------------
# 2) HTTP 엔드포인트: POST /api/generate  {prompt} → {sql}
# ---------------------------------------------------------------
@app.route(route="generate", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def generate(req: func.HttpRequest) -> func.HttpResponse:
    logging.info("generate() called")

    try:
        body = req.get_json()
    except ValueError:
        logging.exception("BAD_JSON")
        return _json_response({"error": "Request body must be valid JSON"}, 400)

    from schema_studio.api import handle_generate

    status, payload = handle_generate(body)
    return _json_response(payload, status)
