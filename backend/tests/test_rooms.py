from app.services.chat import resolve_room


def test_room_key_format():
    assert resolve_room("u1", "m1") == "chat_u1_m1"


def test_room_key_is_order_sensitive():
    assert resolve_room("A", "B") != resolve_room("B", "A")


def test_missing_ids_give_degenerate_key():
    assert resolve_room(None, "m1") == "chat__m1"
    assert resolve_room("u1", None) == "chat_u1_"
    assert resolve_room("", "") == "chat__"


def test_ids_are_not_validated():
    assert resolve_room(42, "m_1") == "chat_42_m_1"


def test_key_parts_render_like_javascript_clients():
    assert resolve_room(True, False) == "chat_true_false"
    assert resolve_room(1.0, "m1") == "chat_1_m1"
    assert resolve_room(1.5, 7) == "chat_1.5_7"
