"""Report a span in generated code against the template it came from."""

from srcspan import FileSet, file_span, new_content_converter

template = b"{{ header }}\nx := {{ value }}\n"
generated = b"// header\nx := 42\n"

fset = FileSet()
f = fset.add_file("/build/out.go", size=len(generated))
f.set_lines_for_content(generated)
# everything in out.go maps back to template.tmpl from its line 1
f.add_line_directive(0, "/src/template.tmpl", 1, 1)

start = f.pos(generated.index(b"x"))
end = f.pos(generated.index(b"42"))
span = file_span(f, new_content_converter("/src/template.tmpl", template), start, end)
print(span)  # /src/template.tmpl:2:1-6
