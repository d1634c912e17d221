from pydantic import BaseModel, Field

# Stored documents
# Products are written by an external data-entry process and read back as stored,
# so only users have a schema here.


class User(BaseModel):
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Unique key, stored as given")
    password_hash: str = Field(..., description="bcrypt hash")


# Request bodies


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str
