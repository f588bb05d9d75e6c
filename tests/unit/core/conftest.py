"""Shared fixtures for core unit tests"""

import pytest

from mdtidy.config import Settings
from mdtidy.core.protect import protect


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.


## Heading 2

- item one
- item two

```python
print("hello")
```

| Name | Age |
| ---- | --- |
| Ann  | 30  |

---

Footer paragraph.
"""

MESSY_MD = """\
---
title: Messy
tags: [a, b]
---
#Getting Started
Some intro text with **bold**.
##Install ##
*item one
* item two
    + nested
    + nested two
        -deep
1. first
1. second
7. third
**Table of Contents:**
Name|Age|City
|---|:-:|--:|
Alice|30|Paris
Bob|4
```sh
# not a heading
-not a list
a|b
```
### Done
"""

MESSY_FORMATTED = """\
---
title: Messy
tags: [a, b]
---


# Getting Started

Some intro text with **bold**.


## Install

- item one
- item two
  - nested
  - nested two
    - deep
1. first
2. second
3. third
**Table of Contents:**
| Name  | Age |  City |
| ----- | :-: | ----: |
| Alice | 30  | Paris |
| Bob   |  4  |       |
```sh
# not a heading
-not a list
a|b
```


### Done
"""


@pytest.fixture(name="settings")
def settings_fixture():
    """Default settings."""
    return Settings()


@pytest.fixture(name="protected")
def protected_fixture():
    """Protect text and return just the ProtectedText."""
    def _protect(text):
        result, _ = protect(text)
        return result
    return _protect


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    """An already well-formatted document."""
    return SAMPLE_MD


@pytest.fixture(name="messy_md")
def messy_md_fixture():
    return MESSY_MD


@pytest.fixture(name="messy_formatted")
def messy_formatted_fixture():
    """MESSY_MD after one pass with default settings."""
    return MESSY_FORMATTED
