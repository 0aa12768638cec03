"""
Product submission handling.

A product write arrives either as a JSON body or as a multipart form with
image files. Both are reduced to a validated ``ProductPayload`` plus the
files to upload and the slot each file belongs to.
"""
import json
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from fastapi import HTTPException, Request
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from ..models.product import ProductDocument, VariantDocument
from ..schemas.product import ImageSlot, ProductPayload

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ("name", "category", "description", "price", "kind", "img")
FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
VARIANT_FIELD = re.compile(r"^variant_image_(\d+)$")


class ProductSubmission(NamedTuple):
    payload: ProductPayload
    files: List[UploadFile]
    slots: List[ImageSlot]


def _validation_detail(error: ValidationError) -> str:
    messages = []
    for err in error.errors(include_url=False, include_context=False):
        location = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(messages)


def _parse_json_field(raw: str, field: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Field '{field}' must be valid JSON")


def validate_payload(data: Any) -> ProductPayload:
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Product payload must be a JSON object")
    try:
        return ProductPayload.model_validate(data)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid product payload: {_validation_detail(e)}")


def slots_from_field_names(field_names: Sequence[str]) -> List[ImageSlot]:
    """
    Derive upload slots from multipart field names

    ``images`` goes to the main gallery, ``variant_image_<n>`` to variant n.
    """
    slots = []
    for field in field_names:
        if field == "images":
            slots.append(ImageSlot(target="main"))
            continue
        match = VARIANT_FIELD.match(field)
        if not match:
            raise HTTPException(status_code=400, detail=f"Unexpected file field: {field}")
        slots.append(ImageSlot(target="variant", index=int(match.group(1))))
    return slots


def parse_manifest(raw: str, file_count: int) -> List[ImageSlot]:
    """Parse an explicit JSON manifest with one slot per uploaded file."""
    entries = _parse_json_field(raw, "manifest")
    if not isinstance(entries, list):
        raise HTTPException(status_code=400, detail="Field 'manifest' must be a JSON list")
    if len(entries) != file_count:
        raise HTTPException(
            status_code=400,
            detail=f"Manifest lists {len(entries)} slots for {file_count} files"
        )
    try:
        return [ImageSlot.model_validate(entry) for entry in entries]
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid manifest: {_validation_detail(e)}")


def check_slots(payload: ProductPayload, slots: Sequence[ImageSlot]) -> None:
    for slot in slots:
        if slot.target == "variant" and slot.index >= len(payload.variants):
            raise HTTPException(
                status_code=400,
                detail=f"Image targets variant {slot.index} but only {len(payload.variants)} variants were sent"
            )


async def _read_form(request: Request) -> ProductSubmission:
    form = await request.form()

    fields: Dict[str, str] = {}
    kept_images: List[str] = []
    files: List[UploadFile] = []
    file_fields: List[str] = []

    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            files.append(value)
            file_fields.append(key)
        elif key == "images":
            value = value.strip()
            if value.startswith("["):
                kept_images.extend(_parse_json_field(value, "images"))
            elif value:
                kept_images.append(value)
        else:
            fields[key] = value

    data: Dict[str, Any] = {
        key: fields[key].strip() for key in SCALAR_FIELDS if fields.get(key, "").strip()
    }
    data["images"] = kept_images
    if fields.get("variants", "").strip():
        data["variants"] = _parse_json_field(fields["variants"], "variants")

    payload = validate_payload(data)

    if fields.get("manifest", "").strip():
        slots = parse_manifest(fields["manifest"], len(files))
    else:
        slots = slots_from_field_names(file_fields)
    check_slots(payload, slots)

    return ProductSubmission(payload, files, slots)


async def read_submission(request: Request) -> ProductSubmission:
    """Read a product write from either a JSON body or a multipart form."""
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        return await _read_form(request)

    try:
        data = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Request body must be valid JSON")
    return ProductSubmission(validate_payload(data), [], [])


def assign_uploads(payload: ProductPayload, slots: Sequence[ImageSlot], urls: Sequence[str]) -> None:
    """Append each uploaded URL to the gallery or variant its slot names."""
    for slot, url in zip(slots, urls):
        if slot.target == "main":
            payload.images.append(url)
        else:
            payload.variants[slot.index].images.append(url)


def build_product_document(
    payload: ProductPayload,
    now: datetime,
    created_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    return ProductDocument(
        name=payload.name,
        category=payload.category,
        description=payload.description,
        kind=payload.kind,
        price=payload.price,
        images=payload.images,
        variants=[VariantDocument(**variant.model_dump()) for variant in payload.variants],
        created_at=created_at or now,
        updated_at=now,
    ).to_mongo()
