import logging

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from email_chain_parser.config import get_settings
from email_chain_parser.services.chain_parser import parse_chain
from email_chain_parser.services.email_reader import EmailReadError, read_email
from email_chain_parser.services.logging_config import configure_logging

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Email Chain Parser", version="0.1.0")


class ChainRequest(BaseModel):
    body: str = ""
    subject: str = ""


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.app_env}


@app.post("/api/upload")
async def upload_email(file: UploadFile | None = File(default=None)) -> JSONResponse:
    if file is None:
        raise HTTPException(status_code=400, detail="No file provided")

    raw = await file.read(settings.max_upload_bytes + 1)
    logger.info(
        "Received email upload",
        extra={"event": "email_upload_received", "filename": file.filename, "size": len(raw)},
    )
    if not raw:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(raw) > settings.max_upload_bytes:
        logger.warning("Rejected oversized email upload", extra={"event": "email_upload_too_large"})
        raise HTTPException(status_code=413, detail="Uploaded file is too large")

    try:
        parsed = read_email(raw)
    except EmailReadError as exc:
        logger.error(
            "Failed to parse uploaded email",
            extra={"event": "email_upload_parse_failed", "filename": file.filename, "error": repr(exc)},
        )
        raise HTTPException(status_code=500, detail="Failed to parse email file") from exc

    chain = parse_chain(parsed.body_text, parsed.subject, options=settings.chain_options())
    result = parsed.to_dict()
    result["chain"] = chain.to_dict()
    logger.info(
        "Email upload processed",
        extra={"event": "email_upload_processed", "messages": len(chain.messages)},
    )
    return JSONResponse(result)


@app.post("/api/chain")
def chain_from_text(request: ChainRequest) -> JSONResponse:
    chain = parse_chain(request.body, request.subject, options=settings.chain_options())
    return JSONResponse(chain.to_dict())


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_config=None)
