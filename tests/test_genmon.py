from fbpanel.genmon import GenMon
from fbpanel.xconf import XConf


def test_defaults():
    gm = GenMon.from_config(XConf("plugin"))
    assert gm.command == "date +%R"
    assert gm.time == 1
    assert gm.textsize == "medium"
    assert gm.textcolor == "darkblue"
    assert gm.max_text_len == 30


def test_config_overrides():
    xc = XConf("plugin")
    xc.append(XConf("Command", "echo hi"))
    xc.append(XConf("PollingTime", "5"))
    xc.append(XConf("TextColor", "red"))
    gm = GenMon.from_config(xc)
    assert gm.command == "echo hi"
    assert gm.time == 5
    assert gm.interval == 5.0
    assert gm.textcolor == "red"


def test_markup_escapes():
    gm = GenMon()
    assert gm.markup("a<b") == "<span size='medium' foreground='darkblue'>a&lt;b</span>"


def test_update_shows_first_line():
    gm = GenMon(command="echo hello; echo world")
    assert gm.update() is True
    assert gm.label == gm.markup("hello")


def test_update_without_output_keeps_label():
    gm = GenMon(command="true")
    assert gm.update() is True
    assert gm.label is None