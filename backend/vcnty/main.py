# backend/vcnty/main.py
from fastapi import FastAPI, UploadFile, File, HTTPException, Header, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
import structlog

from vcnty.config import settings
from vcnty.log_config import configure_logging
from vcnty.api_client import VcntyClient
from vcnty.errors import BackendAPIError, FileTooLargeError, ImportFileError
from vcnty.exporters import errors_csv, template_csv, template_xlsx
from vcnty.importing.pipeline import run_import
from vcnty.importing.readers import check_upload, read_upload

configure_logging()
logger = structlog.get_logger(__name__)

VERSION = "0.1.0"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# ---------------------------------------------------------
# Create FastAPI app
# ---------------------------------------------------------
app = FastAPI(title="VCNTY Seller Import API", version=VERSION)

# Allow frontend to call the API
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------
# Dependencies
# ---------------------------------------------------------
def get_client() -> VcntyClient:
    return VcntyClient()

def bearer_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return authorization.strip()

# ---------------------------------------------------------
# Basic endpoints
# ---------------------------------------------------------
@app.get("/")
def root():
    return {"name": "VCNTY Seller Import API", "status": "ok"}

@app.get("/health")
def health():
    return {"ok": True}

@app.get("/version")
def version():
    return {"version": VERSION}

# ---------------------------------------------------------
# Import template
# ---------------------------------------------------------
@app.get("/api/items/template")
def api_template(fmt: str = "csv"):
    if fmt == "xlsx":
        content, mime = template_xlsx(), XLSX_MIME
    elif fmt == "csv":
        content, mime = template_csv(), "text/csv"
    else:
        raise HTTPException(400, "fmt must be csv or xlsx")
    return Response(
        content=content,
        media_type=mime,
        headers={"Content-Disposition": f'attachment; filename="vcnty_items_template.{fmt}"'},
    )

# ---------------------------------------------------------
# Bulk item import
# ---------------------------------------------------------
def _store_location(client: VcntyClient, store_id: str, token: str | None,
                    latitude: float | None, longitude: float | None) -> dict:
    if latitude is not None and longitude is not None:
        return {"latitude": latitude, "longitude": longitude}
    try:
        store = client.get_store(store_id, token=token)
    except BackendAPIError as e:
        raise HTTPException(502, f"Could not load store {store_id}: {e.message}")
    return {"latitude": store.get("latitude"), "longitude": store.get("longitude")}

@app.post("/api/stores/{store_id}/items/import")
def api_import_items(
    store_id: str,
    file: UploadFile = File(...),
    latitude: float | None = None,
    longitude: float | None = None,
    token: str | None = Depends(bearer_token),
    client: VcntyClient = Depends(get_client),
):
    name = file.filename or ""
    # plain def: the VCNTY calls below block, so this runs in the threadpool
    try:
        # cheap check first: size is known before the body is read
        check_upload(name, file.size or 0)
        data = file.file.read()
        rows = read_upload(name, data)
    except FileTooLargeError as e:
        logger.info("import_upload_rejected", store_id=store_id, filename=name, size=e.size)
        raise HTTPException(413, str(e))
    except ImportFileError as e:
        logger.info("import_upload_rejected", store_id=store_id, filename=name, reason=str(e))
        raise HTTPException(400, str(e))

    location = _store_location(client, store_id, token, latitude, longitude)
    report = run_import(rows, store_id, location, client, token=token)
    return JSONResponse(report)

# ---------------------------------------------------------
# Store inventory (what the import refreshes)
# ---------------------------------------------------------
@app.get("/api/stores/{store_id}/items")
def api_store_items(
    store_id: str,
    limit: int = 20,
    offset: int = 0,
    token: str | None = Depends(bearer_token),
    client: VcntyClient = Depends(get_client),
):
    try:
        return client.list_store_items(store_id, token=token, limit=limit, offset=offset)
    except BackendAPIError as e:
        raise HTTPException(502, e.message)

# ---------------------------------------------------------
# Error log download
# ---------------------------------------------------------
class ErrorLog(BaseModel):
    errors: list[str] = []

@app.post("/api/import/errors.csv")
def api_errors_csv(log: ErrorLog):
    return Response(
        content=errors_csv(log.errors),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="vcnty_import_errors.csv"'},
    )
