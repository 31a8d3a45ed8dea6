from decimal import Decimal

import pytest

from stockledger.config import settings
from stockledger.errors import Conflict, InvalidQuantity, InvalidTransition, NotFound, ReferentialGap
from stockledger.models.serial_number import SerialStatus
from stockledger.models.stock_movement import MovementType
from stockledger.schemas.sale import SaleCreate
from stockledger.services import product_service, sale_service, serial_service, stock_movement_service


def _sale(product_id, quantity=1, price="10.00", **extra) -> SaleCreate:
    return SaleCreate(product_id=product_id, quantity_sold=quantity, sale_price=Decimal(price), **extra)


@pytest.mark.sales
class TestCreateSale:

    def test_sale_updates_product_and_audit_log(self, store, make_product, make_customer):
        customer = make_customer()
        product = make_product(quantity=5)

        sale = sale_service.create_sale(store, _sale(product.id, 3, customer_id=customer.id))

        assert sale.total_amount == Decimal("30.00")
        assert product_service.get_product(store, product.id).quantity == 2
        sale_movements = [
            m for m in stock_movement_service.list_stock_movements_by_product(store, product.id)
            if m.type == MovementType.SALE
        ]
        assert len(sale_movements) == 1
        assert sale_movements[0].quantity == 3
        assert customer.id in sale_movements[0].reason

    def test_total_is_recomputed_not_trusted(self, store, make_product):
        product = make_product(quantity=5)
        sale = sale_service.create_sale(store, _sale(product.id, 2, "2.50", total_amount=Decimal("999")))
        assert sale.total_amount == Decimal("5.00")

    def test_sale_date_and_product_updated_at(self, store, make_product, clock):
        product = make_product(quantity=5)
        clock.advance(minutes=5)

        sale = sale_service.create_sale(store, _sale(product.id))

        assert sale.sale_date == clock.current
        assert product_service.get_product(store, product.id).updated_at == clock.current

    def test_actor_attribution(self, store, make_product):
        product = make_product(quantity=5)
        sale_service.create_sale(store, _sale(product.id), actor="cashier-2")

        movements = stock_movement_service.list_stock_movements_by_product(store, product.id)
        assert {m.user_id for m in movements if m.type == MovementType.SALE} == {"cashier-2"}

    def test_selling_entire_stock(self, store, make_product):
        product = make_product(quantity=4)
        sale_service.create_sale(store, _sale(product.id, 4))
        assert product_service.get_product(store, product.id).quantity == 0

    def test_insufficient_stock_rejected_without_side_effects(self, store, make_product):
        product = make_product(quantity=2)

        with pytest.raises(InvalidQuantity):
            sale_service.create_sale(store, _sale(product.id, 3))

        assert product_service.get_product(store, product.id).quantity == 2
        assert sale_service.list_sales(store) == []
        assert len(stock_movement_service.list_stock_movements_by_product(store, product.id)) == 1

    def test_non_positive_quantity_rejected(self, store, make_product):
        product = make_product(quantity=2)
        data = SaleCreate.model_construct(
            product_id=product.id, quantity_sold=0, sale_price=Decimal("1.00"), serial_numbers=[]
        )
        with pytest.raises(InvalidQuantity):
            sale_service.create_sale(store, data)

    def test_unknown_product_rejected(self, store):
        with pytest.raises(NotFound):
            sale_service.create_sale(store, _sale("missing"))
        assert sale_service.list_sales(store) == []

    def test_unknown_customer_rejected_when_strict(self, store, make_product):
        product = make_product(quantity=2)
        with pytest.raises(ReferentialGap):
            sale_service.create_sale(store, _sale(product.id, customer_id="ghost"))

    def test_unknown_customer_tolerated_when_lenient(self, store, make_product, monkeypatch):
        monkeypatch.setattr(settings, "STRICT_REFERENCES", False)
        product = make_product(quantity=2)

        sale = sale_service.create_sale(store, _sale(product.id, customer_id="ghost"))

        assert sale.customer_id == "ghost"
        assert product_service.get_product(store, product.id).quantity == 1

    def test_sale_of_deleted_product_rejected(self, store, make_product):
        product = make_product(quantity=2)
        product_service.delete_product(store, product.id)
        with pytest.raises(NotFound):
            sale_service.create_sale(store, _sale(product.id))


@pytest.mark.sales
@pytest.mark.serials
class TestSerialAllocation:

    def test_oldest_available_serials_are_allocated(self, store, make_product):
        product = make_product(stock_code="AL", quantity=4)

        sale = sale_service.create_sale(store, _sale(product.id, 2))

        assert sale.serial_numbers == ["AL-001", "AL-002"]
        sold = serial_service.get_serial_number(store, "AL-001")
        assert sold.status == SerialStatus.SOLD
        assert sold.sale_id == sale.id
        assert serial_service.get_serial_number(store, "AL-003").status == SerialStatus.AVAILABLE

    def test_explicit_serials_are_used(self, store, make_product):
        product = make_product(stock_code="EX", quantity=3)

        sale = sale_service.create_sale(store, _sale(product.id, 1, serial_numbers=["EX-003"]))

        assert sale.serial_numbers == ["EX-003"]
        assert serial_service.get_serial_number(store, "EX-003").status == SerialStatus.SOLD
        assert serial_service.get_serial_number(store, "EX-001").status == SerialStatus.AVAILABLE

    def test_explicit_serials_short_of_quantity_are_topped_up(self, store, make_product):
        product = make_product(stock_code="PX", quantity=3)

        sale = sale_service.create_sale(store, _sale(product.id, 3, serial_numbers=["PX-002"]))

        assert sale.serial_numbers == ["PX-002", "PX-001", "PX-003"]
        units = serial_service.list_serial_numbers_by_product(store, product.id)
        assert all(u.status == SerialStatus.SOLD and u.sale_id == sale.id for u in units)
        assert product_service.get_product(store, product.id).quantity == 0

    def test_top_up_takes_oldest_remaining_units(self, store, make_product):
        product = make_product(stock_code="TU", quantity=4)

        sale = sale_service.create_sale(store, _sale(product.id, 2, serial_numbers=["TU-003"]))

        assert sale.serial_numbers == ["TU-003", "TU-001"]
        available = [
            u.serial_number for u in serial_service.list_serial_numbers_by_product(store, product.id)
            if u.status == SerialStatus.AVAILABLE
        ]
        assert available == ["TU-002", "TU-004"]

    def test_untracked_units_sell_without_serials(self, store, make_product):
        product = make_product(quantity=1)
        sale = sale_service.create_sale(store, _sale(product.id))
        assert sale.serial_numbers == []

    def test_sold_serial_cannot_be_sold_again(self, store, make_product):
        product = make_product(stock_code="TW", quantity=3)
        sale_service.create_sale(store, _sale(product.id, 1, serial_numbers=["TW-002"]))

        with pytest.raises(InvalidTransition):
            sale_service.create_sale(store, _sale(product.id, 1, serial_numbers=["TW-002"]))
        assert product_service.get_product(store, product.id).quantity == 2

    def test_serial_of_other_product_rejected(self, store, make_product):
        make_product(stock_code="AA", quantity=2)
        product = make_product(stock_code="BB", quantity=2)
        with pytest.raises(Conflict):
            sale_service.create_sale(store, _sale(product.id, 1, serial_numbers=["AA-001"]))

    def test_unknown_serial_rejected(self, store, make_product):
        product = make_product(quantity=2)
        with pytest.raises(NotFound):
            sale_service.create_sale(store, _sale(product.id, 1, serial_numbers=["nope"]))

    def test_more_serials_than_units_rejected(self, store, make_product):
        product = make_product(stock_code="MS", quantity=3)
        with pytest.raises(InvalidQuantity):
            sale_service.create_sale(store, _sale(product.id, 1, serial_numbers=["MS-001", "MS-002"]))

    def test_repeated_serial_rejected(self, store, make_product):
        product = make_product(stock_code="RP", quantity=3)
        with pytest.raises(InvalidQuantity):
            sale_service.create_sale(store, _sale(product.id, 2, serial_numbers=["RP-001", "RP-001"]))


@pytest.mark.sales
class TestSaleQueries:

    def test_filters_by_product_and_customer(self, store, make_product, make_customer):
        customer = make_customer()
        first = make_product(quantity=5)
        second = make_product(quantity=5)
        a = sale_service.create_sale(store, _sale(first.id, customer_id=customer.id))
        b = sale_service.create_sale(store, _sale(second.id))

        assert [s.id for s in sale_service.list_sales_by_product(store, first.id)] == [a.id]
        assert [s.id for s in sale_service.list_sales_by_customer(store, customer.id)] == [a.id]
        assert sale_service.get_sale(store, b.id).product_id == second.id
        assert sale_service.get_sale(store, "missing") is None

    def test_list_is_newest_first(self, store, make_product, clock):
        product = make_product(quantity=5)
        older = sale_service.create_sale(store, _sale(product.id))
        clock.advance(minutes=1)
        newer = sale_service.create_sale(store, _sale(product.id))

        assert [s.id for s in sale_service.list_sales(store)] == [newer.id, older.id]

    def test_filtered_lists_are_newest_first(self, store, make_product, make_customer, clock):
        customer = make_customer()
        product = make_product(quantity=5)
        older = sale_service.create_sale(store, _sale(product.id, customer_id=customer.id))
        clock.advance(minutes=1)
        newer = sale_service.create_sale(store, _sale(product.id, customer_id=customer.id))

        assert [s.id for s in sale_service.list_sales_by_product(store, product.id)] == [newer.id, older.id]
        assert [s.id for s in sale_service.list_sales_by_customer(store, customer.id)] == [newer.id, older.id]

    def test_today_sales_use_calendar_day(self, store, make_product, clock):
        product = make_product(quantity=20)
        clock.advance(days=-1)
        sale_service.create_sale(store, _sale(product.id, 2, "100.00"))
        clock.advance(days=1)
        today = sale_service.create_sale(store, _sale(product.id, 3, "50.00"))

        assert [s.id for s in sale_service.get_today_sales(store)] == [today.id]


@pytest.mark.sales
class TestSalesStats:

    def test_today_sales_is_a_monetary_total(self, store, make_product, make_customer, clock):
        make_customer()
        make_customer("Globex")
        product = make_product(quantity=50, low_stock_threshold=5)
        make_product(quantity=1)

        clock.advance(days=-1)
        sale_service.create_sale(store, _sale(product.id, 2, "100.00"))
        clock.advance(days=1)
        sale_service.create_sale(store, _sale(product.id, 1, "100.00"))
        sale_service.create_sale(store, _sale(product.id, 1, "50.00"))

        stats = sale_service.get_sales_stats(store)

        assert stats.today_sales == Decimal("150.00")
        assert stats.total_products == 2
        assert stats.low_stock == 1
        assert stats.active_customers == 2

    def test_empty_store(self, store):
        stats = sale_service.get_sales_stats(store)
        assert stats.today_sales == Decimal("0")
        assert stats.total_products == stats.low_stock == stats.active_customers == 0
