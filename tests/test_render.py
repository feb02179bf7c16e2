"""Tests for entry rendering stage."""

from bookindex.models import Alignment, EmitRuns, Entry
from bookindex.pipeline.stage_render import EntryRenderer, render_entry


class TestEntryRenderer:
    """Tests for entry-to-runs conversion."""

    def test_giac_entry(self, giac_entry):
        """Topic, locator and description runs with their styles."""
        topic, locator, description = render_entry(giac_entry)

        assert topic.text == "GIAC"
        assert topic.bold and not topic.italic
        assert topic.font_name == "Times New Roman"
        assert topic.font_size_pt == 10
        assert topic.alignment is Alignment.LEFT

        assert locator.text == " [b1/p5]"
        assert locator.italic and not locator.bold

        assert description.text == " Global Information Assurance Certification"
        assert not description.bold and not description.italic

    def test_always_three_runs(self):
        entry = Entry(topic="x")

        runs = render_entry(entry)

        assert [r.text for r in runs] == ["x", " [b/p]", " "]

    def test_single_paragraph_command(self, giac_entry):
        """Runs go out as one command that ends the paragraph."""
        renderer = EntryRenderer()

        commands = renderer.commands(giac_entry)

        assert commands == [EmitRuns(runs=tuple(renderer.render(giac_entry)), ends_paragraph=True)]

    def test_no_embedded_newlines(self):
        entry = Entry(topic="Multi\nline", description="first\r\nsecond\n", page="1\n", book="2")

        runs = render_entry(entry)

        assert all("\n" not in r.text and "\r" not in r.text for r in runs)
        assert runs[0].text == "Multi line"
        assert runs[1].text == " [b2/p1]"
        assert runs[2].text == " first second"

    def test_custom_font(self, giac_entry):
        runs = EntryRenderer(font_name="Arial", font_size_pt=8).render(giac_entry)

        assert runs[0].font_name == "Arial"
        assert runs[0].font_size_pt == 8
        assert runs[1].font_name is None
