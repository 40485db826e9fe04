# main.py
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import uvicorn

from database import check_connection
from exception_handlers import register_exception_handlers
from logging_config import configure_logging
from routers import bills, contract_requests, contracts, notifications, resources

# Load .env
load_dotenv()
configure_logging()

# App instance
app = FastAPI(title="Motel Rental Backend")

# CORS
origins = [origin for origin in os.getenv("CORS_ORIGINS", "").split(",") if origin]
app.add_middleware(
     CORSMiddleware,
     allow_origins=origins,
     allow_credentials=True,
     allow_methods=["*"],
     allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(contract_requests.router)
app.include_router(contracts.router)
app.include_router(bills.router)
app.include_router(notifications.router)
app.include_router(resources.router)


@app.get("/health", tags=["health"])
def health():
     return {"status": "ok", "database": "up" if check_connection() else "down"}


if __name__ == "__main__":
     port = int(os.getenv("PORT", 10000))
     uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
