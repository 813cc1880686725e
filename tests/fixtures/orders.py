"""주문 테스트 자산

- 단순 dict만 보관
- created_at은 (년, 월, 일, 시) 튜플
"""

ORDERS = [
    {
        "id": "o-1",
        "order_number": "ORD-1001",
        "status": "PENDING",
        "payment_status": "PENDING",
        "payment_provider": None,
        "total": 100.0,
        "customer_name": "Alice Kim",
        "customer_email": "alice@example.com",
        "created_at": (2024, 3, 1, 10),
        "items": [{"product_name": "Cotton Sheet Set", "quantity": 1, "price": 100.0, "total": 100.0}],
    },
    {
        "id": "o-2",
        "order_number": "ORD-1002",
        "status": "CONFIRMED",
        "payment_status": "PAID",
        "payment_provider": "STRIPE",
        "total": 150.0,
        "customer_name": "Bob Lee",
        "customer_email": "bob@example.com",
        "created_at": (2024, 3, 2, 10),
        "items": [{"product_name": "Linen Duvet Cover", "quantity": 1, "price": 150.0, "total": 150.0}],
    },
    {
        "id": "o-3",
        "order_number": "ORD-1003",
        "status": "DELIVERED",
        "payment_status": "PAID",
        "payment_provider": "PAYPAL",
        "total": 200.0,
        "customer_name": "Carol Park",
        "customer_email": "carol@example.com",
        "created_at": (2024, 3, 3, 10),
        "items": [{"product_name": "Bath Towel", "quantity": 2, "price": 100.0, "total": 200.0}],
    },
    {
        "id": "o-4",
        "order_number": "ORD-1004",
        "status": "CANCELLED",
        "payment_status": "FAILED",
        "payment_provider": "STRIPE",
        "total": 50.0,
        "customer_name": "Dan Choi",
        "customer_email": "dan@example.com",
        "created_at": (2024, 3, 4, 10),
        "items": [],
    },
    {
        "id": "o-5",
        "order_number": "ORD-1005",
        "status": "PROCESSING",
        "payment_status": "PAID",
        "payment_provider": "STRIPE",
        "total": 300.0,
        "customer_name": "Alice Kim",
        "customer_email": "alice@example.com",
        "created_at": (2024, 3, 5, 10),
        "items": [{"product_name": "Down Cushion", "quantity": 3, "price": 100.0, "total": 300.0}],
    },
]
