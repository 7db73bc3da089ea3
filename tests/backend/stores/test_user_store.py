import pytest

from backend.core.errors import EmailInUse, NotFound


def test_create_then_find_by_email_and_id(user_store) -> None:
    user_id = user_store.create(name='Ana', email='ana@x.com', password_hash='hash', role='teacher')

    by_email = user_store.find_by_email('ana@x.com')
    by_id = user_store.find_by_id(user_id)

    assert by_email is not None
    assert by_email.id == user_id
    assert by_id.name == 'Ana'
    assert by_id.role == 'teacher'


def test_find_returns_none_for_unknown_user(user_store) -> None:
    assert user_store.find_by_email('nobody@x.com') is None
    assert user_store.find_by_id(404) is None


def test_update_changes_allowed_fields_only(user_store) -> None:
    user_id = user_store.create(name='Ana', email='ana@x.com', password_hash='hash', role='student')

    user = user_store.update(user_id, name='Ana Maria', role='teacher', id=99)

    assert user.id == user_id
    assert user.name == 'Ana Maria'
    assert user.role == 'teacher'


def test_update_missing_user_raises_not_found(user_store) -> None:
    with pytest.raises(NotFound):
        user_store.update(404, name='Ghost')


def test_update_with_no_changes_still_checks_existence(user_store) -> None:
    with pytest.raises(NotFound):
        user_store.update(404)


def test_create_with_taken_email_raises_email_in_use(user_store) -> None:
    user_store.create(name='Ana', email='ana@x.com', password_hash='hash', role='teacher')

    with pytest.raises(EmailInUse):
        user_store.create(name='Other', email='ana@x.com', password_hash='hash', role='student')

    assert user_store.find_by_email('ana@x.com').name == 'Ana'


def test_update_to_taken_email_raises_email_in_use(user_store) -> None:
    user_store.create(name='Ana', email='ana@x.com', password_hash='hash', role='teacher')
    bia_id = user_store.create(name='Bia', email='bia@x.com', password_hash='hash', role='student')

    with pytest.raises(EmailInUse):
        user_store.update(bia_id, email='ana@x.com')

    assert user_store.find_by_id(bia_id).email == 'bia@x.com'
