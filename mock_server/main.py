from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pathlib import Path
from typing import Optional
import os

app = FastAPI(title="Mock iDEAL Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/ideal_stub") if os.path.exists("/ideal_stub") else Path(__file__).resolve().parent / "responses"


def xml_file(name: str) -> Response:
    file = DATA_DIR / name
    if not file.exists():
        raise HTTPException(status_code=404, detail="transaction not found")
    return Response(content=file.read_bytes(), media_type="text/xml")


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/xml/ideal")
def ideal(a: str, partnerid: Optional[int] = None, transaction_id: Optional[str] = None):
    if a == "banklist":
        return xml_file("banklist.xml")
    if partnerid is None:
        return xml_file("error.xml")
    if a == "fetch":
        return xml_file("fetch.xml")
    if a == "check":
        return xml_file(f"check_{transaction_id}.xml")
    raise HTTPException(status_code=400, detail=f"unknown action {a}")
