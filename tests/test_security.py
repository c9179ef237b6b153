from auth.security import hash_password, verify_password


def test_hash_is_salted_and_not_plaintext() -> None:
    first = hash_password("secret123")
    second = hash_password("secret123")
    assert "secret123" not in first
    assert first != second
    assert first.startswith("$2")


def test_verify_password() -> None:
    hashed = hash_password("secret123")
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)
