# main.py
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from googleapiclient.errors import HttpError

env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

from .config import ConfigurationError, formatting_enabled, get_spreadsheet_id
from .ledger import LedgerWriter
from .logging_config import logger
from .model import PaymentRequest
from .sheets import SheetsBackend, get_sheets_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing credentials abort startup
    backend = SheetsBackend(get_sheets_service(), get_spreadsheet_id())
    app.state.ledger_writer = LedgerWriter(backend, apply_formatting=formatting_enabled())
    logger.info(f"Ledger writer ready for spreadsheet {backend.spreadsheet_id}")
    yield


app = FastAPI(title="Payment Ledger", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HttpError)
async def sheets_error_handler(request: Request, exc: HttpError):
    logger.error(f"Spreadsheet backend call failed: {exc}")
    return JSONResponse(
        status_code=502,
        content={"message": "Spreadsheet backend error", "detail": str(exc)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": "Service is not configured", "detail": str(exc)},
    )


# Dependency
def get_ledger_writer(request: Request) -> LedgerWriter:
    writer = getattr(request.app.state, "ledger_writer", None)
    if writer is None:
        raise ConfigurationError("Ledger writer was not initialised at startup")
    return writer


@app.get("/")
def root():
    return {"message": "Payment Ledger Service is Live!"}


@app.post("/payment/save", response_class=PlainTextResponse)
def save_payment(
    payment: PaymentRequest,
    writer: LedgerWriter = Depends(get_ledger_writer),
):
    ledger = writer.save_payment(payment)
    logger.info(f"Payment for {payment.date} saved to '{ledger.title}'")
    return "Payment Stored Successfully"
