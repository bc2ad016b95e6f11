import base64
import hashlib
import io

from fastapi import FastAPI, File, HTTPException, UploadFile

from .decoding import decode_csv_bytes
from .models import AreaResponse, HealthResponse, RunSummary, TransformedCsv, TransformResponse
from .pipeline import transform_stream
from .rules import FILE_ENCODING
from .shapes import InvalidDimensionError, ShapeRequest, area

app = FastAPI(
    title="catalog-transform",
    description="Product catalog CSV transform: discounts, recategorization, price ranges",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/transform", response_model=TransformResponse)
async def transform_csv(file: UploadFile = File(...)):
    if not file.filename or not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    text, decoding = decode_csv_bytes(raw)

    summary = RunSummary()
    sink = io.StringIO(newline="")
    transform_stream(io.StringIO(text), sink, summary)

    out_bytes = sink.getvalue().encode(FILE_ENCODING)
    return TransformResponse(
        transformed_csv=TransformedCsv(
            sha256=hashlib.sha256(out_bytes).hexdigest(),
            encoding=FILE_ENCODING,
            content_b64=base64.b64encode(out_bytes).decode("ascii"),
        ),
        summary=summary,
        decoding=decoding,
    )

@app.post("/area", response_model=AreaResponse)
def shape_area(request: ShapeRequest):
    shape = request.root
    try:
        value = area(shape)
    except InvalidDimensionError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"kind": shape.kind, "area": value}
