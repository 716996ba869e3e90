"""Shared fixtures for pygini tests.

- conf_dir: temporary configuration directory with a root file and include
- config: IniConfig bound to conf_dir
"""

from pathlib import Path

import pytest

from pygini import IniConfig

APP_CONF = """\
; demo application
app_name = demo
session_on = YES
http_addr = 8080
ratio = 0.25

[database]
host = "db.local"
port = 5432

[file]
include = extra.conf
"""

EXTRA_CONF = """\
# pulled in by app.conf
[samblog]
title = 'Sam blog'
posts = 12

[database]
host = ignored.local
user = admin
"""


@pytest.fixture
def conf_dir(tmp_path: Path) -> Path:
    """Provide a conf directory holding app.conf and its include."""
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    (conf_dir / "app.conf").write_text(APP_CONF, encoding="utf-8")
    (conf_dir / "extra.conf").write_text(EXTRA_CONF, encoding="utf-8")
    return conf_dir


@pytest.fixture
def config(conf_dir: Path) -> IniConfig:
    """IniConfig bound to the temporary conf directory."""
    return IniConfig(conf_dir)
