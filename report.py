#
# Copyright (c) 2024-2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import html
import sys
import textwrap


from typing import Sequence, Any, TextIO
from abc import ABC, abstractmethod


class Report(ABC):

    def start(self, title:str) -> None:
        pass

    @abstractmethod
    def write_heading(self, heading:str, level:int=1) -> None:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def write_paragraph(self, paragraph:str) -> None:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def write_table(self, rows:Sequence[Sequence], header:Sequence[Any]|None=None, footer:Sequence[Any]|None=None, just:Sequence[Any]|None=None, indent:str='') -> None:  # pragma: no cover
        raise NotImplementedError

    @staticmethod
    def format(field:Any) -> str:
        if field is None or field != field:
            return ''
        else:
            return str(field)

    def end(self) -> None:
        pass


class TextReport(Report):

    width = 100

    def __init__(self, stream:TextIO=sys.stdout):
        if sys.platform == 'win32' and not stream.isatty():
            stream.reconfigure(encoding='utf-8-sig')  # type: ignore[attr-defined]
        self.stream = stream
        self.heading_sep = ''
        self.started = False

    def start(self, title:str) -> None:
        # Several documents may go to the same stream
        if self.started:
            self.stream.write('\n' + '═' * self.width + '\n\n')
        self.started = True
        self.heading_sep = ''

    def write_heading(self, heading:str, level:int=1) -> None:
        if level <= 1:
            heading = heading.upper()
        if sys.platform != 'win32' and self.stream.isatty():
            # Ansi escape
            _csi = '\33['
            normal = _csi + '0m'
            bold = _csi + '1m'
            heading = bold + heading + normal
        self.stream.write(self.heading_sep + heading + '\n\n')
        self.heading_sep = ''

    def write_paragraph(self, paragraph:str) -> None:
        paragraph = '\n'.join(textwrap.wrap(paragraph, width=self.width))
        self.stream.write(paragraph + '\n\n')
        self.heading_sep = '\n'

    def write_table(self, rows:Sequence[Sequence], header:Sequence[Any]|None=None, footer:Sequence[Any]|None=None, just:Sequence[Any]|None=None, indent:str='') -> None:
        ncols = len(header if header is not None else rows[0])

        def justify(cells:Sequence[Any]) -> list[str]:
            cells = [self.format(cell) for cell in cells]
            assert len(cells) == ncols
            return cells

        body = [justify(row) for row in rows]
        head = justify(header) if header is not None else None
        foot = justify(footer) if footer is not None else None

        lines = body + [line for line in (head, foot) if line is not None]
        widths = [max(len(line[c]) for line in lines) for c in range(ncols)]

        m = {
            'c': str.center,
            'l': str.ljust,
            'r': str.rjust,
        }
        if just is None:
            aligns = [str.center] * ncols
        else:
            assert len(just) == ncols
            aligns = [m[j] for j in just]

        sep = '  '

        def render(cells:list[str]) -> str:
            return indent + sep.join(align(cell, width) for cell, align, width in zip(cells, aligns, widths)).rstrip() + '\n'

        rule = indent + '─' * len(sep.join(' ' * width for width in widths)) + '\n'

        stream = self.stream
        if head is not None:
            stream.write(render(head))
            stream.write(rule)
        for cells in body:
            stream.write(render(cells))
        if foot is not None:
            stream.write(rule)
            stream.write(render(foot))

        stream.write('\n')

        self.heading_sep = '\n'


class HtmlReport(Report):

    _css = '''
body {
  font-family: "Noto Sans Mono", monospace;
  font-size: 0.75rem; /* 12px */
  background-color: white;
}

.fixed-right {
  position: fixed;
  top: 0;
  right: 0;
}

h1, h2, h3, h4 {
  font-size: 100%;
  font-weight: bold;
  margin-top: 2em;
  margin-bottom: 1em;
}

h1, h2 {
  text-transform: uppercase;
}

.text-center { text-align: center; }
.text-right { text-align: right; }
.text-left { text-align: left; }

@media print {
  body { font-size: 10px; }
  .hidden-print { display: none !important; }
  section { page-break-after: always; }
}

table {
  margin: 1em auto 1em 2ch;
  border-spacing: 0;
}

thead tr th { border-bottom: 1.5px solid; }
tfoot tr th { border-top: 1.5px solid; }

th, td {
  padding: 0.25em 1ch 0.25em 1ch;
}
'''

    def __init__(self, stream:TextIO):
        if sys.platform == 'win32' and not stream.isatty():
            stream.reconfigure(encoding='utf-8-sig')  # type: ignore[attr-defined]
        self.stream = stream

    def start(self, title:str) -> None:
        title = html.escape(title)
        # https://fonts.google.com/noto/specimen/Noto+Sans+Mono
        self.stream.write(f'''<!doctype html>
<html lang="pt-BR">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<link href="https://fonts.googleapis.com/css2?family=Noto+Sans+Mono&amp;display=swap" rel="stylesheet">
<style>{self._css}</style>
</head>
<body>
<div class="fixed-right hidden-print">
<button onclick="window.print()">Imprimir</button>
</div>
<section>
''')

    def write_heading(self, heading:str, level:int=1) -> None:
        heading = html.escape(heading)
        self.stream.write(f'\n<h{level}>{heading}</h{level}>\n\n')

    def write_paragraph(self, paragraph:str) -> None:
        paragraph = html.escape(paragraph)
        self.stream.write(f'<p>{paragraph}</p>\n\n')

    @staticmethod
    def format_and_escape(field:Any) -> str:
        field = Report.format(field)
        field = html.escape(field)
        return field

    def write_table(self, rows:Sequence[Sequence], header:Sequence[Any]|None=None, footer:Sequence[Any]|None=None, just:Sequence[Any]|None=None, indent:str='') -> None:
        fmt = self.format_and_escape

        m = {
            'c': 'text-center',
            'l': 'text-left',
            'r': 'text-right',
        }
        ncols = len(header if header is not None else rows[0])
        classes = [m[j] for j in just] if just is not None else ['text-center'] * ncols

        def cells(tag:str, fields:Sequence[Any]) -> str:
            return ''.join([f'<{tag} class="{c}">{fmt(field)}</{tag}>' for field, c in zip(fields, classes)])

        self.stream.write('<table>\n')
        if header is not None:
            self.stream.write('<thead><tr>' + cells('th', header) + '</tr></thead>\n')
        self.stream.write('<tbody>\n')
        for row in rows:
            self.stream.write('<tr>' + cells('td', row) + '</tr>\n')
        self.stream.write('</tbody>\n')
        if footer is not None:
            self.stream.write('<tfoot><tr>' + cells('th', footer) + '</tr></tfoot>\n')
        self.stream.write('</table>\n')

    def end(self) -> None:
        self.stream.write('</section>\n')
        self.stream.write('</body>\n')
        self.stream.write('</html>\n')
