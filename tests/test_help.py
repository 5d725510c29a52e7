from stevie.help import help_pages, show_help


class RecordingTerminal:
    def __init__(self):
        self.events = []

    def goto(self, row, col):
        self.events.append(("goto", row, col))

    def put(self, text):
        self.events.append(("put", text))

    def clear(self):
        self.events.append(("clear",))

    def refresh(self):
        self.events.append(("refresh",))

    def clears(self):
        return sum(1 for e in self.events if e[0] == "clear")


def keys(*chars):
    it = iter(chars)
    return lambda: next(it)


def test_pages_content():
    pages = help_pages()
    assert len(pages) == 3
    assert "Cursor movement commands" in pages[0]
    assert "Modification commands" in pages[1]
    assert pages[2].rstrip().endswith("<Press any key>")
    assert all(page.startswith("\n") for page in pages)


def test_first_pages_offer_to_continue():
    for page in help_pages()[:2]:
        assert "<Press space bar to continue>" in page
        assert page.endswith("<Any other key will quit>")


def test_space_pages_through_all():
    term = RecordingTerminal()
    shown = show_help(term, keys(" ", " ", "x"))
    assert shown == 3
    assert term.clears() == 3


def test_other_key_stops():
    term = RecordingTerminal()
    shown = show_help(term, keys("q"))
    assert shown == 1
    assert term.clears() == 1
    assert term.events[-1] == ("refresh",)


def test_lines_drawn_on_their_rows():
    term = RecordingTerminal()
    show_help(term, keys("q"))
    lines = help_pages()[0].split("\n")
    gotos = [e for e in term.events if e[0] == "goto"]
    puts = [e[1] for e in term.events if e[0] == "put"]
    assert gotos == [("goto", row, 0) for row in range(len(lines))]
    assert puts == lines