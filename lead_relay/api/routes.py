from http import HTTPStatus

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from lead_relay.api.services import Services
from lead_relay.intake.models import RequestMeta
from lead_relay.logging.logger import Log
from lead_relay.pdf.exceptions import PdfWatermarkError
from lead_relay.pdf.models import WatermarkOptions, watermarked_filename
from lead_relay.webhooks.models import HandlerResponse
from lead_relay.webhooks.processor import WebhookProcessor

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

router = APIRouter()


def _services(request: Request) -> Services:
    return request.app.state.services


def _request_meta(request: Request) -> RequestMeta:
    headers = request.headers
    return RequestMeta(
        method=request.method,
        content_type=headers.get("content-type"),
        referer=headers.get("referer"),
        user_agent=headers.get("user-agent"),
        forwarded_for=headers.get("x-forwarded-for"),
    )


def _to_response(result: HandlerResponse) -> Response:
    if result.text is not None:
        return PlainTextResponse(result.text, status_code=result.status_code)
    if result.body is None:
        return Response(status_code=result.status_code)
    return JSONResponse(result.body, status_code=result.status_code)


async def _run_webhook(request: Request, processor: WebhookProcessor) -> Response:
    raw_body = await request.body()
    result = await run_in_threadpool(processor.handle, _request_meta(request), raw_body)
    return _to_response(result)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.api_route("/api/meta-capi", methods=ALL_METHODS)
async def meta_capi(request: Request) -> Response:
    return await _run_webhook(request, _services(request).lead)


@router.api_route("/api/meta-capi-app", methods=ALL_METHODS)
async def meta_capi_app(request: Request) -> Response:
    return await _run_webhook(request, _services(request).app)


@router.api_route("/api/cf/log", methods=ALL_METHODS)
async def probe_log(request: Request) -> Response:
    raw_body = await request.body()
    result = _services(request).probe.handle(
        _request_meta(request), raw_body, header_names=list(request.headers.keys())
    )
    return _to_response(result)


@router.api_route("/api/send", methods=ALL_METHODS)
async def send_mail(request: Request) -> Response:
    raw_body = await request.body()
    result = await run_in_threadpool(
        _services(request).mail.handle,
        _request_meta(request),
        raw_body,
        request.query_params.get("token"),
    )
    return _to_response(result)


@router.post("/api/watermark")
async def watermark(
    request: Request,
    text: str = "CONFIDENTIAL",
    opacity: float = 0.25,
    filename: str | None = None,
) -> Response:
    raw_body = await request.body()
    options = WatermarkOptions(text=text.strip() or "CONFIDENTIAL", opacity=opacity)
    try:
        stamped = await run_in_threadpool(_services(request).watermarker.apply, raw_body, options)
    except PdfWatermarkError as exc:
        Log.warning(f"Watermark rejected: {exc}")
        return _to_response(HandlerResponse.error(HTTPStatus.BAD_REQUEST, str(exc)))

    output_name = watermarked_filename(filename)
    Log.info("Watermarked PDF", output_name=output_name, input_bytes=len(raw_body))
    return Response(
        content=stamped,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{output_name}"'},
    )
