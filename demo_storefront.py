"""
스토어 검색/주문 관리 데모
샘플 데이터를 넣고 검색 엔진과 주문 상태 관리를 실제로 실행해 봅니다
"""
import uuid
from datetime import datetime, timedelta

from src.core.database import get_db_context, init_db
from src.engine import SearchEngine
from src.repositories.impl import CatalogRepository, OrderRepository
from src.repositories.models import Category, Order, OrderItem, Product, ProductTag
from src.services.impl.order_lifecycle_service import OrderLifecycleService
from src.services.impl.order_query_service import OrderQueryService, build_order_filter


def seed_catalog(db):
    """예제 1: 카탈로그 시드"""
    print("\n" + "=" * 70)
    print("📝 예제 1: 카탈로그 시드")
    print("=" * 70)

    if db.query(Category).count():
        print("  이미 시드됨 - 건너뜀")
        return

    bedding = Category(name="Bedding", slug="bedding")
    bath = Category(name="Bath Towels", slug="bath-towels")
    db.add_all([bedding, bath])
    db.flush()

    products = [
        Product(name="Sheet", slug="sheet", price=49, category_id=bedding.id, rating=4.6, is_bestseller=True),
        Product(name="Cotton Sheet Set", slug="cotton-sheet-set", price=89, category_id=bedding.id,
                short_description="Percale cotton sheets", rating=4.2, is_on_sale=True, original_price=109),
        Product(name="Down Cushion", slug="down-cushion", price=35, category_id=bedding.id,
                tags=[ProductTag(value="cushion")]),
        Product(name="Linen Duvet Cover", slug="linen-duvet-cover", price=129, category_id=bedding.id,
                description="Stonewashed linen comforter cover", is_new=True),
        Product(name="Bath Towel", slug="bath-towel", price=19, category_id=bath.id, in_stock=False),
    ]
    db.add_all(products)
    print(f"  ✅ {len(products)}개 상품 등록")


def seed_orders(db):
    """예제 2: 주문 시드"""
    print("\n" + "=" * 70)
    print("📝 예제 2: 주문 시드")
    print("=" * 70)

    if db.query(Order).count():
        print("  이미 시드됨 - 건너뜀")
        return

    now = datetime.utcnow()
    samples = [
        ("ORD-1001", "PENDING", "PENDING", None),
        ("ORD-1002", "CONFIRMED", "PAID", "STRIPE"),
        ("ORD-1003", "DELIVERED", "PAID", "PAYPAL"),
        ("ORD-1004", "PROCESSING", "PAID", "STRIPE"),
    ]
    for i, (number, status, payment_status, provider) in enumerate(samples):
        db.add(Order(
            id=str(uuid.uuid4()),
            order_number=number,
            status=status,
            payment_status=payment_status,
            payment_provider=provider,
            total=100 + i * 25,
            customer_name=f"Customer {i + 1}",
            customer_email=f"customer{i + 1}@example.com",
            created_at=now - timedelta(days=i),
            items=[OrderItem(product_name="Cotton Sheet Set", quantity=1, price=100 + i * 25, total=100 + i * 25)],
        ))
    print(f"  ✅ {len(samples)}개 주문 등록")


def demo_search(db):
    """예제 3: 검색"""
    print("\n" + "=" * 70)
    print("🔍 예제 3: 검색 (pillow → cushion 동의어)")
    print("=" * 70)

    engine = SearchEngine(CatalogRepository(db))
    for query in ("sheet", "pillow"):
        outcome = engine.search(query, limit=5)
        print(f"\n  '{query}' → {[item.name for item in outcome.results]}")
        print(f"    제안: {[item.name for item in outcome.product_suggestions]}")
        print(f"    카테고리: {[c.name for c in outcome.category_suggestions]}")


def demo_orders(db):
    """예제 4: 주문 상태 관리"""
    print("\n" + "=" * 70)
    print("📦 예제 4: 주문 상태 관리")
    print("=" * 70)

    repository = OrderRepository(db)
    service = OrderLifecycleService(repository)
    by_number = {o.order_number: o for o in db.query(Order).all()}

    shipped = service.update_status(by_number["ORD-1004"].id, "SHIPPED", tracking_number="TRK-42", admin_id="demo")
    print(f"\n  ORD-1004 → {shipped.status} (예상 배송: {shipped.estimated_delivery:%Y-%m-%d})")

    result = service.bulk_action("refund", [by_number["ORD-1002"].id, by_number["ORD-1003"].id], admin_id="demo")
    print(f"  환불: {result.count}건 성공")
    for r in result.results or []:
        print(f"    - {r.order_id}: {'✅' if r.success else '❌ ' + str(r.error)}")

    data = OrderQueryService(repository).list_orders(build_order_filter(), limit=10)
    print(f"\n  총 매출(PAID): {data.analytics.total_revenue}")
    print(f"  평균 주문액: {data.analytics.average_order_value}")
    print(f"  상태 분포: {[(s.status, s.count) for s in data.analytics.status_distribution]}")


def main():
    """모든 데모 실행"""
    print("\n" + "=" * 70)
    print("🚀 스토어 검색/주문 관리 데모")
    print("=" * 70)

    init_db()
    with get_db_context() as db:
        seed_catalog(db)
        seed_orders(db)

    with get_db_context() as db:
        demo_search(db)
        demo_orders(db)

    print("\n" + "=" * 70)
    print("✅ 모든 데모 완료!")
    print("=" * 70)
    print("\n💡 다음 단계:")
    print("  1. 서버 시작: uvicorn src.app:app --reload")
    print("  2. API 호출:")
    print("     curl 'http://localhost:8000/api/search?q=sheet'")
    print("=" * 70 + "\n")


if __name__ == "__main__":
    main()
