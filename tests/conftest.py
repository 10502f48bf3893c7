"""Root test configuration: a small but complete sample site written into tmp_path"""

from pathlib import Path

import pytest


CONFIG_TOML = """\
base_url = "https://example.com"
title = "My Blog"
description = "Projects and notes."
author = "Jane Doe"
generate_feeds = true
taxonomies = [{ name = "tags" }]

[markdown]
external_links_target_blank = true
bottom_footnotes = true

[extra]
logo = "images/logo.png"
menu = [{ url = "/", name = "Home" }]
language_code = "en-US"
timezone = "UTC"
timeformat = "%Y-%m-%d"

[extra.github]
username = "jane"
repo = "jane.github.io"

[extra.feed]
path = "/atom.xml"
"""

SITE_FILES = {
    "content/_index.md": """\
+++
title = "Home"
+++
""",
    "content/posts/_index.md": """\
+++
title = "Posts"
paginate_by = 1
+++
""",
    "content/posts/hello.md": """\
+++
title = "Hello"
date = 2024-01-10

[taxonomies]
tags = ["rust", "search"]

[extra]
images = ["images/hello.png"]
+++

Hi there, this is the first post.

<!-- more -->

More text with a [link](https://example.org).
""",
    "content/posts/second.md": """\
+++
title = "Second"
description = "Explicit description."
date = 2024-02-01

[taxonomies]
tags = ["rust"]
+++

Second post body.
""",
    "content/posts/draft.md": """\
+++
title = "Unfinished"
draft = true
+++

Not ready.
""",
    "content/about.md": """\
---
title: About
extra:
  no_page_info: true
---

About me.
""",
    "static/style.css": "body { margin: 0; }\n",
}


def write_site(root: Path) -> Path:
    (root / "config.toml").write_text(CONFIG_TOML, encoding="utf-8")
    for rel, text in SITE_FILES.items():
        dest = root / rel
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(text, encoding="utf-8")
    return root


@pytest.fixture(name="site_dir")
def site_dir_fixture(tmp_path):
    """tmp_path populated with config.toml, content/ and static/."""
    return write_site(tmp_path)


@pytest.fixture(autouse=True)
def no_github_token(monkeypatch):
    """Tests never see a real token from the environment."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
