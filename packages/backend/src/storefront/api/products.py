"""Product API routes.

REST routes answer in the {status, data} envelope. POST accepts either
a multipart form (REST create, thumbnail file required) or a JSON body
(the admin realtime page's shortcut, answered with the bare product).
DELETE is a view shortcut and answers {status: "success", message}.

Every {pid} goes through valid_product_id first: a malformed id is a
404 and never reaches the database.
"""

import re
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import FormData, UploadFile

from storefront.api.responses import ok, rest_errors, view_error, view_errors, view_success
from storefront.db.engine import get_db
from storefront.db.models import Product
from storefront.errors import StorefrontError
from storefront.schemas.product import ProductCreate, ProductRead, ProductUpdate
from storefront.services.product_service import ProductService
from storefront.uploads import discard_thumbnail, save_thumbnail

logger = structlog.get_logger()
router = APIRouter(prefix="/products")

PRODUCT_ID_PATTERN = re.compile(r"[a-fA-F0-9]{24}")
REQUIRED_FIELDS = ("title", "description", "price", "code", "stock")
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def valid_product_id(pid: str) -> str:
    """Accept any-case hex ids; stored ids are lowercase."""
    if not PRODUCT_ID_PATTERN.fullmatch(pid):
        raise StorefrontError("INVALID_PARAMETER", envelope="ERR")
    return pid.lower()


def _svc(db: AsyncSession = Depends(get_db)) -> ProductService:
    return ProductService(db)


def _read(product: Optional[Product]) -> Optional[dict]:
    if product is None:
        return None
    return ProductRead.model_validate(product).model_dump()


def _uploaded_file(form: FormData) -> Optional[UploadFile]:
    upload = form.get("thumbnail")
    if isinstance(upload, UploadFile) and upload.filename:
        return upload
    return None


def _form_fields(form: FormData) -> dict:
    """Required text fields plus category if sent. Missing/empty → 400."""
    if any(not form.get(name) for name in REQUIRED_FIELDS):
        raise StorefrontError("MISSING_FIELDS", envelope="ERR")
    fields = {name: form.get(name) for name in REQUIRED_FIELDS}
    if form.get("category"):
        fields["category"] = form.get("category")
    return fields


def _is_form(request: Request) -> bool:
    return request.headers.get("content-type", "").startswith(FORM_CONTENT_TYPES)


# ─── Reads ──────────────────────────────────────────────

@router.get("")
@rest_errors
async def list_products(svc: ProductService = Depends(_svc)):
    products = await svc.get_products()
    return ok([_read(p) for p in products])


@router.get("/{pid}")
@rest_errors
async def get_product(
    pid: str = Depends(valid_product_id),
    svc: ProductService = Depends(_svc),
):
    """One product; data is null when the id is well-formed but unknown."""
    product = await svc.get_product(pid)
    return ok(_read(product))


# ─── Writes ─────────────────────────────────────────────

@router.post("")
async def create_product(request: Request, svc: ProductService = Depends(_svc)):
    if _is_form(request):
        return await _create_from_form(request, svc)
    return await _create_from_json(request, svc)


@rest_errors
async def _create_from_form(request: Request, svc: ProductService):
    form = await request.form()
    upload = _uploaded_file(form)
    if upload is None:
        raise StorefrontError("UPLOAD_FAILED", envelope="FIL")

    fields = _form_fields(form)
    try:
        data = ProductCreate(**fields)
    except ValidationError as e:
        raise StorefrontError("INVALID_FIELDS", envelope="ERR") from e

    data.thumbnail = await save_thumbnail(upload)
    try:
        product = await svc.add_product(data)
    except Exception:
        await discard_thumbnail(data.thumbnail)
        raise
    return ok(_read(product))


@view_errors
async def _create_from_json(request: Request, svc: ProductService):
    body = await request.json()
    try:
        data = ProductCreate.model_validate(body)
    except ValidationError as e:
        return view_error(str(e), status_code=400)

    product = await svc.add_product(data)
    logger.debug("storefront.product.created_from_view", title=product.title)
    return JSONResponse(content=jsonable_encoder(_read(product)))


@router.put("/{pid}")
@rest_errors
async def update_product(
    request: Request,
    pid: str = Depends(valid_product_id),
    svc: ProductService = Depends(_svc),
):
    """Partial update. The thumbnail is replaced only when a file is sent."""
    form = await request.form()
    fields = _form_fields(form)
    try:
        data = ProductUpdate(**fields)
    except ValidationError as e:
        raise StorefrontError("INVALID_FIELDS", envelope="ERR") from e

    if await svc.get_product(pid) is None:
        return ok(None)

    upload = _uploaded_file(form)
    if upload is None:
        return ok(_read(await svc.update_product(pid, data)))

    data.thumbnail = await save_thumbnail(upload)
    try:
        product = await svc.update_product(pid, data)
    except Exception:
        await discard_thumbnail(data.thumbnail)
        raise
    if product is None:
        await discard_thumbnail(data.thumbnail)
    return ok(_read(product))


@router.delete("/{pid}")
@view_errors
async def delete_product(
    pid: str = Depends(valid_product_id),
    svc: ProductService = Depends(_svc),
):
    """Delete a product. Unknown ids still answer success."""
    await svc.delete_product(pid)
    return view_success("Product deleted")
