import pytest
from profile_service.core.security import (
    DUMMY_PASSWORD_HASH, verify_password, get_password_hash, pwd_context
)

def test_password_hashing():
    """Test that password hashing works correctly"""
    password = "mysecretpassword"
    hashed = get_password_hash(password)

    # Verify the hash is not the plain password
    assert hashed != password

    # Verify the hash starts with $argon2 indicating Argon2 was used
    assert hashed.startswith("$argon2")

    # Verify the same password hashes to different values (due to salt)
    assert get_password_hash(password) != get_password_hash(password)

def test_password_verification():
    """Test that password verification works correctly"""
    password = "mysecretpassword"
    hashed = get_password_hash(password)

    # Verify correct password matches
    assert verify_password(password, hashed) is True

    # Verify incorrect password doesn't match
    assert verify_password("wrongpassword", hashed) is False

def test_single_character_password():
    """Very short passwords are still hashed and verified"""
    hashed = get_password_hash("p")
    assert hashed != "p"
    assert verify_password("p", hashed) is True

def test_invalid_password_scenarios():
    """Test various invalid password scenarios"""
    # Test hashing with None password
    with pytest.raises(TypeError):
        get_password_hash(None)

    # Test verification with empty password
    assert not verify_password("", get_password_hash("test"))

    # Test verification with empty hash
    assert not verify_password("password", "")

    # Test verification with invalid hash format
    assert not verify_password("password", "invalid_hash_format")

def test_dummy_hash_never_matches_user_input():
    """The timing dummy hash is a real Argon2 hash that ordinary passwords do not match"""
    assert DUMMY_PASSWORD_HASH.startswith("$argon2")
    assert verify_password("password", DUMMY_PASSWORD_HASH) is False

def test_argon2_parameters():
    """Test that Argon2 parameters are correctly configured"""
    # Verify Argon2 is the default scheme
    assert pwd_context.default_scheme() == "argon2"

    # Create a hash and verify it starts with argon2
    test_hash = get_password_hash("test")
    assert test_hash.startswith("$argon2")

    # Verify the hash can be used for verification
    assert verify_password("test", test_hash)
