"""
Test the logging sanitizer utility.
Passwords and tokens must never reach the log files.
"""

from school_inventory.utils.logging_sanitizer import (
    SENSITIVE_FIELDS,
    sanitize_dict,
    sanitize_exception_message,
)


def test_sanitize_dict():
    """Test dictionary sanitization"""
    test_data = {
        'username': 'admin',
        'password': 'secret123',
        'email': 'admin@example.com'
    }
    result = sanitize_dict(test_data)
    assert result['username'] == 'admin', "Username should not be redacted"
    assert result['password'] == '[REDACTED]', "Password should be redacted"
    assert result['email'] == 'admin@example.com', "Email should not be redacted"

    # Case insensitivity
    result = sanitize_dict({'Password': 'a', 'PASSWORD': 'b', 'Token': 'c'})
    assert result == {'Password': '[REDACTED]', 'PASSWORD': '[REDACTED]', 'Token': '[REDACTED]'}

    # Input is left untouched
    assert test_data['password'] == 'secret123', "Input dict should not be mutated"


def test_sanitize_nested_payloads():
    """Nested dicts and lists of dicts are sanitized too"""
    test_data = {
        'admin': {'username': 'admin', 'password': 'secret123'},
        'items': [{'label_code': 'LAB-001', 'token': 'abc'}, 'plain'],
        'quantity_total': 5,
    }
    result = sanitize_dict(test_data)
    assert result['admin'] == {'username': 'admin', 'password': '[REDACTED]'}
    assert result['items'][0] == {'label_code': 'LAB-001', 'token': '[REDACTED]'}
    assert result['items'][1] == 'plain'
    assert result['quantity_total'] == 5


def test_sanitize_empty_and_custom_redaction():
    assert sanitize_dict(None) is None
    assert sanitize_dict({}) == {}
    assert sanitize_dict({'csrf_token': 'x'}, redact_text='***') == {'csrf_token': '***'}


def test_sensitive_fields_cover_credentials():
    for field in ('password', 'password_hash', 'token', 'csrf_token', 'secret'):
        assert field in SENSITIVE_FIELDS, f"{field} should be treated as sensitive"


def test_sanitize_exception_message():
    assert sanitize_exception_message(ValueError("label code already used")) == "label code already used"

    masked = sanitize_exception_message(RuntimeError("bad password for admin"))
    assert 'bad password' not in masked
    assert masked.startswith('RuntimeError')
