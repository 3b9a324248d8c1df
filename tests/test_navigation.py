"""Tests for the view state machine."""

import pytest

from errors import InvalidTransition
from navigation import Navigator
from schemas import AdminTab, Role, View


@pytest.fixture
def nav():
    return Navigator()


class TestNavigate:
    def test_starts_on_home(self, nav):
        assert nav.view == View.HOME
        assert nav.role is None

    @pytest.mark.parametrize("view", [View.HOME, View.SHOP, View.CART])
    def test_direct_views(self, nav, view):
        nav.navigate(view)
        assert nav.view == view

    @pytest.mark.parametrize("view", [View.CHECKOUT, View.SUCCESS, View.PRODUCT_DETAIL])
    def test_views_with_own_intents_not_direct(self, nav, view):
        with pytest.raises(InvalidTransition):
            nav.navigate(view)
        assert nav.view == View.HOME

    def test_home_and_shop_clear_search(self, nav):
        nav.search("ayam")
        nav.navigate(View.SHOP)
        assert nav.search_query == ""

    def test_cart_keeps_search(self, nav):
        nav.search("ayam")
        nav.navigate(View.CART)
        assert nav.search_query == "ayam"


class TestCheckoutTransitions:
    def test_start_checkout_needs_items(self, nav):
        assert nav.start_checkout(cart_empty=True) is False
        assert nav.view == View.HOME
        assert nav.start_checkout(cart_empty=False) is True
        assert nav.view == View.CHECKOUT

    def test_payment_confirmed_clears_selection(self, nav, catalog):
        nav.select_product(catalog.find_by_id(1))
        nav.payment_confirmed()
        assert nav.view == View.SUCCESS
        assert nav.selected_product is None


class TestAdmin:
    def test_admin_requires_role(self, nav):
        with pytest.raises(InvalidTransition):
            nav.navigate(View.ADMIN)

    def test_enter_and_exit(self, nav):
        nav.enter_admin_demo()
        assert nav.role == Role.ADMIN
        assert nav.view == View.ADMIN
        nav.navigate(View.SHOP)
        nav.navigate(View.ADMIN)
        assert nav.view == View.ADMIN
        nav.exit_admin()
        assert nav.role is None
        assert nav.view == View.HOME

    def test_admin_tabs(self, nav):
        with pytest.raises(InvalidTransition):
            nav.select_admin_tab(AdminTab.ORDERS)
        nav.enter_admin_demo()
        nav.select_admin_tab(AdminTab.ORDERS)
        assert nav.admin_tab == AdminTab.ORDERS


class TestSearchRedirectRule:
    def test_new_query_off_shop_needs_redirect(self, nav):
        nav.search("telur")
        assert nav.needs_search_redirect(previous_query="")
        assert nav.apply_search_redirect()
        assert nav.view == View.SHOP

    def test_no_redirect_on_shop(self, nav):
        nav.navigate(View.SHOP)
        nav.search("telur")
        assert not nav.needs_search_redirect(previous_query="")

    def test_clearing_query_never_redirects(self, nav):
        nav.navigate(View.SHOP)
        nav.search("telur")
        nav.navigate(View.CART)
        nav.clear_search()
        assert not nav.needs_search_redirect(previous_query="telur")
        assert not nav.apply_search_redirect()
        assert nav.view == View.CART

    def test_unchanged_query_does_not_redirect(self, nav, catalog):
        nav.search("telur")
        nav.apply_search_redirect()
        nav.select_product(catalog.find_by_id(1))
        assert not nav.needs_search_redirect(previous_query="telur")
        assert nav.view == View.PRODUCT_DETAIL
