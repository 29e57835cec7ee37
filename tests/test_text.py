import pytest

from jessy.filesig.text import (
    ChecksumFailedError,
    ChecksumMissingError,
    TextPlacement,
    add_text_file_checksum,
    add_yaml_checksum,
    detect_line_end_format,
    verify_text_file_checksum,
    verify_yaml_checksum,
)

TEXT = b"#!/bin/bash\n# Initial\n# Comment\n# Block\n\ndo_something()"
SUM = "ZwngYUfUBeUn99HSdrNxkWSNjqrgZuSpVrexeEYttBso5o"

AFTER_COMMENT = (
    "#!/bin/bash\n# Initial\n# Comment\n# Block\n"
    f"# jess-checksum: {SUM}\n\ndo_something()\n"
).encode()
AT_TOP = (
    f"# jess-checksum: {SUM}\n"
    "#!/bin/bash\n# Initial\n# Comment\n# Block\n\ndo_something()\n"
).encode()
AT_BOTTOM = (
    "#!/bin/bash\n# Initial\n# Comment\n# Block\n\ndo_something()\n\n"
    f"# jess-checksum: {SUM}\n"
).encode()

MULTI = b"""# jess-checksum: PTNktssvYCYjZXLFL2QoBk7DYoSz1qF7DJd5XNvtptd41B
#!/bin/bash
# Initial
# Comment
# Block
# jess-checksum: Cy2TyVDjEStUqX3wCzCCKTfy228KaQK25ZDbHNmKiF8SPf

do_something()

# jess-checksum: YdgJFzuvFduk1MwRjZ2JkWQ6tCE1wkjn9xubSggKAdJSX5
"""

MULTI_OUT = b"""#!/bin/bash
# Initial
# Comment
# Block
# jess-checksum: Cy2TyVDjEStUqX3wCzCCKTfy228KaQK25ZDbHNmKiF8SPf
# jess-checksum: PTNktssvYCYjZXLFL2QoBk7DYoSz1qF7DJd5XNvtptd41B
# jess-checksum: YdgJFzuvFduk1MwRjZ2JkWQ6tCE1wkjn9xubSggKAdJSX5
# jess-checksum: ZwngYUfUBeUn99HSdrNxkWSNjqrgZuSpVrexeEYttBso5o

do_something()
"""

FAILING = b"""#!/bin/bash
# Initial
# Comment
# Block
# jess-checksum: Cy2TyVDjEStUqX3wCzCCKTfy228KaQK25ZDbHNmKiF8SPf
# jess-checksum: PTNktssvYCYjZXLFL2QoBk7DYoSz1qF7DJd5XNvtptd41B
# jess-checksum: YdgJFzuvFduk1MwRjZ2JkWQ6tCE1wkjn9xubSggKAdJSX5
# jess-checksum: ZwngYUfUBeUn99HSdrNxkWSNjaaaaaaaaaaaaaaaaaaaaa

do_something()
"""


def test_after_comment():
    out = add_text_file_checksum(TEXT, "#", TextPlacement.AFTER_COMMENT)
    assert out == AFTER_COMMENT
    assert verify_text_file_checksum(out, "#") is None
    assert verify_text_file_checksum(b"\n\n  \r\n" + out, "#") is None
    assert verify_text_file_checksum(out + b"\r\n \n \n", "#") is None


def test_top_and_bottom():
    top = add_text_file_checksum(TEXT, "#", TextPlacement.TOP)
    assert top == AT_TOP
    assert verify_text_file_checksum(top, "#") is None
    bottom = add_text_file_checksum(TEXT, "#", TextPlacement.BOTTOM)
    assert bottom == AT_BOTTOM
    assert verify_text_file_checksum(bottom, "#") is None


def test_default_placement_is_after_comment():
    assert add_text_file_checksum(TEXT, "#") == AFTER_COMMENT


def test_multiple_checksums():
    assert verify_text_file_checksum(MULTI, "#") is None
    assert add_text_file_checksum(MULTI, "#", TextPlacement.AFTER_COMMENT) == MULTI_OUT


def test_failing_checksums():
    with pytest.raises(ChecksumFailedError):
        verify_text_file_checksum(FAILING, "#")


def test_missing_checksum():
    with pytest.raises(ChecksumMissingError):
        verify_text_file_checksum(TEXT, "#")


def test_yaml():
    out = add_yaml_checksum(TEXT, TextPlacement.TOP)
    assert out == AT_TOP
    assert verify_yaml_checksum(out) is None


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"", "\n"),
        (b"\n", "\n"),
        (b"\r\n", "\r\n"),
        (b"abc\n", "\n"),
        (b"abc\r\n", "\r\n"),
        (b"abc\nabc\r\n", "\n"),
        (b"abc\r\nabc\n", "\r\n"),
    ],
)
def test_line_end_detection(data, expected):
    assert detect_line_end_format(data) == expected