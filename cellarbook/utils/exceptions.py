class ProductNotFoundError(Exception):
    """Produit absent OU appartenant à un autre utilisateur (indiscernables)"""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class OrderNotFoundError(Exception):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class DuplicateProductNameError(Exception):
    def __init__(self, name: str, field: str = "name"):
        self.name = name
        self.field = field
        super().__init__(f"Product with name '{name}' already exists")
