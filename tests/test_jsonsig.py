import pytest

from jessy.filesig.jsonsig import add_json_checksum, verify_json_checksum
from jessy.filesig.text import ChecksumFailedError, ChecksumMissingError

JSON = b'{"a": "b", "c": 1}'

WITH_CHECKSUM = b"""{
 "_jess-checksum": "ZwtAd75qvioh6uf1NAq64KRgTbqeehFVYmhLmrwu1s7xJo",
 "a": "b",
 "c": 1
}
"""

REORDERED = b"""{
\t"c": 1,     "a":"b",
\t\t"_jess-checksum": "ZwtAd75qvioh6uf1NAq64KRgTbqeehFVYmhLmrwu1s7xJo"
\t}"""

MULTI = b"""{
\t\t"_jess-checksum": [
\t\t\t"PTV7S3Ca81aRk2kdNw7q2RfjLfEdPPT5Px5d211nhZedZC",
\t\t\t"PTV7S3Ca81aRk2kdNw7q2RfjLfEdPPT5Px5d211nhZedZC",
\t\t\t"CyDGH55DZUwa556DiYztMXaKZVBDjzWeFETiGmABMbvC3V"
\t\t],
\t\t"a": "b",
\t\t"c": 1
\t }
\t """

MULTI_OUT = b"""{
 "_jess-checksum": ["CyDGH55DZUwa556DiYztMXaKZVBDjzWeFETiGmABMbvC3V", "PTV7S3Ca81aRk2kdNw7q2RfjLfEdPPT5Px5d211nhZedZC", "ZwtAd75qvioh6uf1NAq64KRgTbqeehFVYmhLmrwu1s7xJo"],
 "a": "b",
 "c": 1
}
"""


def test_add_checksum():
    out = add_json_checksum(JSON)
    assert out == WITH_CHECKSUM
    assert verify_json_checksum(out) is None


def test_verify_reordered():
    assert verify_json_checksum(REORDERED) is None


def test_multi_checksum():
    assert verify_json_checksum(MULTI) is None
    out = add_json_checksum(MULTI)
    assert out == MULTI_OUT
    assert verify_json_checksum(out) is None


def test_missing_checksum():
    with pytest.raises(ChecksumMissingError):
        verify_json_checksum(JSON)


def test_modified_content_fails():
    tampered = WITH_CHECKSUM.replace(b'"c": 1', b'"c": 2')
    with pytest.raises(ChecksumFailedError):
        verify_json_checksum(tampered)


def test_invalid_json():
    with pytest.raises(ValueError):
        add_json_checksum(b'{"a": ')