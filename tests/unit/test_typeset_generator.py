"""
Unit Tests for Typeset Generator
================================

Tests for LaTeX longtable generation.
"""

import pytest
import pandas as pd

from research_tables.core.errors import FormatError
from research_tables.core.rendering.html_generator import FOOTNOTE
from research_tables.core.rendering.typeset_generator import (
    LatexTableGenerator, TypesetTable, generate_typeset, latex_escape
)
from research_tables.models.schemas import TypesetOptions


@pytest.fixture
def generator(test_settings):
    return LatexTableGenerator()


class TestLatexEscape:

    def test_special_characters(self):
        assert latex_escape("50% & $5") == r"50\% \& \$5"
        assert latex_escape("a_b#c") == r"a\_b\#c"
        assert latex_escape("{x}") == r"\{x\}"
        assert latex_escape("~^") == r"\textasciitilde{}\textasciicircum{}"
        assert latex_escape("\\") == r"\textbackslash{}"

    def test_plain_text_unchanged(self):
        assert latex_escape("plain text 123") == "plain text 123"


class TestLatexTableGenerator:

    def test_longtable_structure(self, generator, simple_df, test_settings):
        table = generator.generate(simple_df, TypesetOptions())
        latex = table.to_latex()

        assert isinstance(table, TypesetTable)
        assert latex.startswith("\\begingroup\\fontsize{9}{11}\\selectfont")
        assert "\\begin{longtable}" in latex
        assert "\\end{longtable}" in latex
        assert latex.count("\\toprule") == 2
        assert "\\endfirsthead" in latex
        assert "\\endhead" in latex
        assert "\\bottomrule" in latex

    def test_header_repeats_after_page_break(self, generator, simple_df, test_settings):
        latex = generator.generate(simple_df, TypesetOptions()).to_latex()
        header = "\\textbf{id} & \\textbf{value}\\\\"

        assert latex.count(header) == 2
        assert "\\textit{(continued)}" in latex

    def test_first_column_fixed_width_and_bold(self, generator, simple_df, test_settings):
        latex = generator.generate(simple_df, TypesetOptions()).to_latex()

        assert "{@{\\extracolsep{\\fill}}>{\\bfseries\\raggedright\\arraybackslash}p{1.5cm}l}" in latex

    def test_fits_text_width(self, generator, simple_df, test_settings):
        latex = generator.generate(simple_df, TypesetOptions()).to_latex()

        assert "\\setlength\\LTleft{0pt}" in latex
        assert "\\setlength\\LTright{0pt}" in latex

    def test_body_rows(self, generator, simple_df, test_settings):
        table = generator.generate(simple_df, TypesetOptions())

        assert "1 & a\\\\" in table.latex
        assert "2 & b\\\\" in table.latex
        assert table.row_count == 2
        assert table.labels == ["id", "value"]

    def test_footnote(self, generator, simple_df, test_settings):
        table = generator.generate(simple_df, TypesetOptions())

        assert table.footnote == FOOTNOTE
        assert f"\\textit{{注：}} {FOOTNOTE}" in table.latex

    def test_custom_options(self, generator, simple_df, test_settings):
        options = TypesetOptions(
            font_size=11,
            col_names=["ID", "Value"],
            first_column_width="2cm",
            footnote_title="Note:",
        )
        table = generator.generate(simple_df, options)

        assert "\\fontsize{11}{14}" in table.latex
        assert "p{2cm}" in table.latex
        assert "\\textbf{ID} & \\textbf{Value}" in table.latex
        assert "\\textit{Note:}" in table.latex

    def test_escape_cells(self, generator, test_settings):
        df = pd.DataFrame({"rate_%": ["10% & up"]})
        table = generator.generate(df, TypesetOptions(escape=True))

        assert "\\textbf{rate\\_\\%}" in table.latex
        assert "10\\% \\& up\\\\" in table.latex

    def test_raw_latex_kept_by_default(self, generator, test_settings):
        df = pd.DataFrame({"coef": ["$\\beta = 0.42$"]})
        table = generator.generate(df, TypesetOptions())

        assert "$\\beta = 0.42$\\\\" in table.latex

    def test_label_count_mismatch(self, generator, simple_df, test_settings):
        with pytest.raises(FormatError):
            generator.generate(simple_df, TypesetOptions(col_names=["a", "b", "c"]))

    def test_no_columns(self, generator, test_settings):
        with pytest.raises(FormatError, match="no columns"):
            generator.generate(pd.DataFrame(), TypesetOptions())

    def test_single_column(self, generator, test_settings):
        table = generator.generate(pd.DataFrame({"only": [1]}), TypesetOptions())

        assert "p{1.5cm}}" in table.latex
        assert "\\multicolumn{1}" in table.latex

    def test_preamble(self, generator, simple_df, test_settings):
        preamble = generator.generate(simple_df, TypesetOptions()).preamble()

        assert "\\usepackage{booktabs}" in preamble
        assert "\\usepackage{longtable}" in preamble
        assert "\\usepackage{array}" in preamble
        assert "\\usepackage[T1]{fontenc}" in preamble

    def test_str_is_latex(self, generator, simple_df, test_settings):
        table = generator.generate(simple_df, TypesetOptions())
        assert str(table) == table.latex


def test_generate_typeset_function(simple_df, test_settings):
    table = generate_typeset(simple_df, TypesetOptions())
    assert table.labels == ["id", "value"]
