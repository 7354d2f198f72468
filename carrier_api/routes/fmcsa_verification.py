# carrier_api/routes/fmcsa_verification.py
import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from carrier_api.carrier_verification import (
    InvalidMcNumber,
    RegistryUnavailable,
    build_verification_result,
    normalize_mc_number,
)
from carrier_api.fmcsa_client import FmcsaClient

logger = logging.getLogger(__name__)

router = APIRouter()


def get_fmcsa_client(request: Request) -> FmcsaClient:
    return request.app.state.fmcsa_client


def _is_json(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == "application/json"


async def process_verification(mc_number: Any, client: FmcsaClient) -> JSONResponse:
    """Shared by the GET and POST routes: validate, look up, reshape."""
    try:
        clean_mc = normalize_mc_number(mc_number)
    except InvalidMcNumber as e:
        return JSONResponse(status_code=400, content={"error": e.error, "message": e.message})

    logger.info("Verifying MC Number: %s", clean_mc)

    try:
        fmcsa_data = await client.lookup(clean_mc)
    except RegistryUnavailable as e:
        logger.error("Verification Error: %s", e)
        return JSONResponse(
            status_code=500,
            content={
                "verified": False,
                "error": "Verification failed",
                "message": str(e),
                "mc_number": mc_number,
            },
        )

    result = build_verification_result(fmcsa_data, clean_mc)
    return JSONResponse(content=result.model_dump(mode="json"))


@router.get("/verify-carrier")
async def verify_carrier_query(
    mc_number: Optional[str] = Query(default=None),
    client: FmcsaClient = Depends(get_fmcsa_client),
):
    """Verify an MC number passed as ?mc_number=..."""
    return await process_verification(mc_number, client)


@router.post("/verify-carrier")
async def verify_carrier_body(request: Request, client: FmcsaClient = Depends(get_fmcsa_client)):
    """Verify an MC number passed as {"mc_number": ...}. Numbers are accepted too."""
    data = {}
    # Only JSON bodies are read; form or text bodies count as a missing mc_number
    if _is_json(request):
        body = await request.body()
        # malformed JSON bubbles up as a 500
        data = json.loads(body) if body.strip() else {}
    mc_number = data.get("mc_number") if isinstance(data, dict) else None
    return await process_verification(mc_number, client)
