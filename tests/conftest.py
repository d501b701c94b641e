"""Shared fixtures: a small on-disk site with content models, data and pages"""

import json
from pathlib import Path

import pytest

from sitegraph.config import Settings
from sitegraph.core.schema import FieldDef, ModelDef, ReferenceIndex


MODELS = {
    "Config": "name: Config\ntype: data\nfields:\n  - {name: title, type: string}\n",
    "Person": (
        "name: Person\ntype: data\nfields:\n"
        "  - {name: name, type: string}\n"
        "  - {name: friend, type: reference}\n"
    ),
    "PageLayout": (
        "name: PageLayout\ntype: page\nfields:\n"
        "  - {name: title, type: string}\n"
        "  - {name: author, type: reference}\n"
        "  - name: featured\n    type: list\n    items: {type: reference}\n"
        "  - name: sections\n    type: list\n    items: {type: model}\n"
    ),
    "FeaturedSection": (
        "name: FeaturedSection\nfields:\n"
        "  - name: items\n    type: list\n    items: {type: model}\n"
    ),
    "Card": "name: Card\nfields:\n  - {name: person, type: reference}\n",
}

ALICE = "content/data/team/alice.json"
BOB = "content/data/team/bob.json"

DATA = {
    "content/data/config.json": {"type": "Config", "title": "My Site"},
    ALICE: {"type": "Person", "name": "Alice", "friend": BOB},
    BOB: {"type": "Person", "name": "Bob", "friend": ALICE},
}

HOME_MD = f"""\
---
type: PageLayout
title: Home
author: {ALICE}
sections:
  - type: HeroSection
    title: Hi
  - type: HeroSection
    title: Again
  - type: FeaturedSection
    styles:
      self: {{justifyContent: center}}
    items:
      - type: Card
        person: {BOB}
---
# Welcome
"""

BLOG_MD = f"""\
---
type: PageLayout
title: Blog
featured:
  - {ALICE}
  - content/data/team/nobody.json
---
Posts.
"""

ABOUT_MD = """\
---
type: PageLayout
title: About
author: content/data/team/nobody.json
---
About us.
"""


def write_site(root: Path) -> Path:
    models_dir = root / ".stackbit" / "models"
    models_dir.mkdir(parents=True)
    for name, text in MODELS.items():
        (models_dir / f"{name}.yaml").write_text(text)

    for rel, data in DATA.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(data))

    pages = root / "content" / "pages"
    (pages / "blog").mkdir(parents=True)
    (pages / "index.md").write_text(HOME_MD)
    (pages / "blog" / "index.md").write_text(BLOG_MD)
    (pages / "about.md").write_text(ABOUT_MD)
    return root


@pytest.fixture(name="site_root")
def site_root_fixture(tmp_path):
    return write_site(tmp_path / "site")


@pytest.fixture(name="settings")
def settings_fixture(site_root):
    return Settings(root_dir=str(site_root))


@pytest.fixture(name="index")
def index_fixture():
    return ReferenceIndex.from_models([
        ModelDef(name="PageLayout", fields=[
            FieldDef(name="title", type="string"),
            FieldDef(name="author", type="reference"),
            FieldDef(name="featured", type="list", items={"type": "reference"}),
            FieldDef(name="sections", type="list", items={"type": "model"}),
        ]),
        ModelDef(name="Person", fields=[FieldDef(name="friend", type="reference")]),
        ModelDef(name="Card", fields=[FieldDef(name="person", type="reference")]),
    ])
