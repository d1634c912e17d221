from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from bson import Decimal128, ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from pymongo import DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from config import Config
from errors import DuplicateUser

USERS_COLLECTION = "users"
PRODUCTS_COLLECTION = "products"


def connect(cfg: Config) -> MongoClient:
    """Open the shared client and make sure the users collection is indexed."""
    if not cfg.DATABASE_URL:
        raise RuntimeError("DATABASE_URL (or MONGODB_URI) is not set")
    client = MongoClient(cfg.DATABASE_URL)
    # One user per email, enforced by the store so concurrent registrations can't both win.
    client[cfg.USERS_DATABASE_NAME][USERS_COLLECTION].create_index("email", unique=True)
    return client


def create_document(collection: Collection, data: Union[BaseModel, dict]) -> str:
    if isinstance(data, BaseModel):
        data_dict = data.model_dump()
    else:
        data_dict = data.copy()

    now = datetime.now(timezone.utc)
    data_dict["created_at"] = now
    data_dict["updated_at"] = now

    result = collection.insert_one(data_dict)
    return str(result.inserted_id)


def get_documents(
    collection: Collection,
    filter_dict: Optional[Dict[str, Any]] = None,
    sort: Optional[List[tuple]] = None,
) -> List[dict]:
    cursor = collection.find(filter_dict or {})
    if sort:
        cursor = cursor.sort(sort)
    return list(cursor)


# Users


def get_user_by_email(users: Collection, email: str) -> Optional[dict]:
    return users.find_one({"email": email})


def create_user(users: Collection, user: BaseModel) -> str:
    try:
        return create_document(users, user)
    except DuplicateKeyError:
        raise DuplicateUser()


# Products


def serialize_product(doc: dict) -> dict:
    d = dict(doc)
    d["id"] = str(d.pop("_id"))
    # Products are maintained outside this service; fields pass through as stored.
    return jsonable_encoder(d, custom_encoder={ObjectId: str, Decimal128: str})


def list_products(products: Collection) -> List[dict]:
    return [serialize_product(d) for d in get_documents(products)]


def get_product(products: Collection, product_id: ObjectId) -> Optional[dict]:
    doc = products.find_one({"_id": product_id})
    return serialize_product(doc) if doc else None


def list_flash_sale(products: Collection) -> List[dict]:
    docs = get_documents(products, {"flashSale": True, "discount": {"$exists": True, "$ne": None}})
    return [serialize_product(d) for d in docs]


def list_top_rated(products: Collection) -> List[dict]:
    docs = get_documents(products, sort=[("ratings", DESCENDING)])
    return [serialize_product(d) for d in docs]
