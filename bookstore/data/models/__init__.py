#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from bookstore.data.models.book import BookModel
from bookstore.data.models.category import CategoryModel
from bookstore.data.models.role import RoleModel
from bookstore.data.models.user import UserModel
from bookstore.data.models.cart import ShoppingCartModel
from bookstore.data.models.cart_item import CartItemModel
from bookstore.data.models.order import OrderModel
from bookstore.data.models.order_item import OrderItemModel

__all__ = [
    "BookModel",
    "CategoryModel",
    "RoleModel",
    "UserModel",
    "ShoppingCartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
]
