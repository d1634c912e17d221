from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List

from bson import ObjectId
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

import database
from config import Config, load_config
from errors import (
    APIError,
    DuplicateUser,
    InternalError,
    InvalidCredentials,
    InvalidId,
    InvalidRequestBody,
    NotFound,
)
from logging_config import setup_logging
from schemas import LoginRequest, RegisterRequest, User as UserSchema
from security import create_access_token, hash_password, verify_password

cfg: Config = load_config()
logger = setup_logging("pocket_tech", cfg.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.cfg = cfg
    client = database.connect(cfg)
    app.state.users = client[cfg.USERS_DATABASE_NAME][database.USERS_COLLECTION]
    app.state.products = client[cfg.PRODUCTS_DATABASE_NAME][database.PRODUCTS_COLLECTION]
    logger.info("Connected to MongoDB")
    try:
        yield
    finally:
        client.close()
        logger.info("MongoDB connection closed")


app = FastAPI(title="Pocket Tech API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handlers

@app.exception_handler(APIError)
async def _handle_api_error(request: Request, exc: APIError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def _handle_bad_body(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request body on %s", request.url.path)
    err = InvalidRequestBody()
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.exception_handler(PyMongoError)
async def _handle_store_error(request: Request, exc: PyMongoError):
    logger.error("Database error on %s", request.url.path, exc_info=exc)
    err = InternalError()
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.exception_handler(Exception)
async def _handle_unexpected(request: Request, exc: Exception):
    logger.error("Unhandled error on %s", request.url.path, exc_info=exc)
    err = InternalError()
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


# Dependencies

def get_users(request: Request) -> Collection:
    return request.app.state.users


def get_products(request: Request) -> Collection:
    return request.app.state.products


@app.get("/")
def read_root():
    return {
        "message": "Server is running smoothly",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# Auth endpoints
@app.post("/api/v1/register", status_code=201)
def register(payload: RegisterRequest, users: Collection = Depends(get_users)):
    if database.get_user_by_email(users, payload.email):
        logger.warning("Registration attempt with existing email: %s", payload.email)
        raise DuplicateUser()
    pwd = hash_password(payload.password, rounds=cfg.BCRYPT_ROUNDS)
    user = UserSchema(name=payload.name, email=payload.email, password_hash=pwd)
    database.create_user(users, user)
    logger.info("New user %s registered", payload.email)
    return {"success": True, "message": "User registered successfully"}


@app.post("/api/v1/login")
def login(payload: LoginRequest, users: Collection = Depends(get_users)):
    user = database.get_user_by_email(users, payload.email)
    # Accounts created before the rename keep their hash under "password".
    stored_hash = (user.get("password_hash") or user.get("password") or "") if user else ""
    if not user or not verify_password(payload.password, stored_hash):
        logger.warning("Failed login attempt for email: %s", payload.email)
        raise InvalidCredentials()
    token = create_access_token(
        email=user["email"],
        secret=cfg.JWT_SECRET,
        expires_in=cfg.EXPIRES_IN,
    )
    logger.info("User %s logged in", payload.email)
    return {"success": True, "message": "Login successful", "token": token}


# Products endpoints
@app.get("/api/v1/products")
def list_products(products: Collection = Depends(get_products)) -> List[dict]:
    return database.list_products(products)


@app.get("/api/v1/products/{productid}")
def get_product(productid: str, products: Collection = Depends(get_products)) -> dict:
    if not ObjectId.is_valid(productid):
        logger.info("Rejected malformed product id: %r", productid)
        raise InvalidId()
    product = database.get_product(products, ObjectId(productid))
    if product is None:
        raise NotFound()
    return product


@app.get("/api/v1/flashsale")
def flash_sale(products: Collection = Depends(get_products)) -> List[dict]:
    return database.list_flash_sale(products)


@app.get("/api/v1/topRatedProducts")
def top_rated_products(products: Collection = Depends(get_products)) -> List[dict]:
    return database.list_top_rated(products)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=cfg.HOST, port=cfg.PORT)
