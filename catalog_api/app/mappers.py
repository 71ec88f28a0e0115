"""
Conversions between API schemas and persisted records.

All functions are pure.  Server owned fields (``id``, ``created_at``,
``updated_at``) are never taken from input schemas; the ``apply_*``
helpers copy the mutable fields onto an existing record and leave the
server owned ones untouched.
"""

from .models import Product, User
from .schemas.product import ProductCreate, ProductRead
from .schemas.user import UserCreate, UserRead, UserUpdate


def user_from_create(data: UserCreate) -> User:
    # The password is hashed by the service before the record is stored.
    return User(name=data.name, email=str(data.email), password=data.password)


def user_to_read(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def apply_user_update(data: UserUpdate, user: User) -> User:
    user.name = data.name
    user.email = str(data.email)
    user.password = data.password
    return user


def product_from_create(data: ProductCreate) -> Product:
    return Product(
        name=data.name,
        description=data.description,
        price=data.price,
        quantity=data.quantity,
        category=data.category,
    )


def product_to_read(product: Product) -> ProductRead:
    return ProductRead(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        quantity=product.quantity,
        category=product.category,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def apply_product_update(data: ProductCreate, product: Product) -> Product:
    product.name = data.name
    product.description = data.description
    product.price = data.price
    product.quantity = data.quantity
    product.category = data.category
    return product
