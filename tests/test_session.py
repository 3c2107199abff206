# tests/test_session.py
from decimal import Decimal

import pytest

from storefront.accounts import AccountStore
from storefront.catalog import Catalog
from storefront.errors import AccessDenied, InvalidCredentials, NotAuthenticated
from storefront.session import SessionController, SessionState


def _accounts():
    accounts = AccountStore()
    accounts.register("user1", "pass1")
    accounts.register("admin", "admin")
    return accounts


def test_login_logout_cycle_clears_cart():
    accounts = _accounts()
    sessions = SessionController()
    token = sessions.login(accounts, "user1", "pass1")
    session = sessions.get(token)
    assert session.state is SessionState.LOGGED_IN

    p = Catalog().add_product("Shirt", "Clothing", Decimal("799"), 60)
    session.cart.add_item(p, 2)
    sessions.logout(token)

    assert session.state is SessionState.LOGGED_OUT
    assert len(session.cart) == 0
    with pytest.raises(NotAuthenticated):
        sessions.get(token)


def test_bad_login_issues_no_token():
    sessions = SessionController()
    with pytest.raises(InvalidCredentials):
        sessions.login(_accounts(), "user1", "nope")
    assert len(sessions) == 0


def test_admin_gate_is_by_username():
    accounts = _accounts()
    sessions = SessionController()
    user = sessions.login(accounts, "user1", "pass1")
    admin = sessions.login(accounts, "admin", "admin")

    assert sessions.require_admin(admin).username == "admin"
    with pytest.raises(AccessDenied):
        sessions.require_admin(user)
    with pytest.raises(NotAuthenticated):
        sessions.require_admin(None)


def test_each_login_gets_its_own_cart():
    accounts = _accounts()
    sessions = SessionController()
    a = sessions.get(sessions.login(accounts, "user1", "pass1"))
    b = sessions.get(sessions.login(accounts, "user1", "pass1"))
    assert a.cart is not b.cart
