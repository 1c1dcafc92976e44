# Import every model so Base.metadata knows all tables
from models.base import Base
from models.cart_item import CartItem
from models.category import Category
from models.district import District
from models.otp import OTPRecord
from models.product import Product
