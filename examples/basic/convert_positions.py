"""Offsets to line/column and back, including the end-of-file position."""

from srcspan import new_content_converter

conv = new_content_converter("greeting.txt", b"hello\nworld")

print("offset 7 ->", conv.offset_to_line_column(7))  # (2, 2)
print("line 2, col 1 ->", conv.line_column_to_offset(2, 1))  # 6
print("end of file ->", conv.offset_to_line_column(11))  # (3, 1)
