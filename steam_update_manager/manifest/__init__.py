# Manifest package
from .codec import (
    split_key_value,
    decode_manifest,
    decode_title,
    format_manifest_line,
    manifest_declares_name,
    set_manifest_value,
)
from .files import (
    read_manifest_text,
    split_lines,
    join_lines,
    write_manifest_lines,
    update_manifest_value,
)
