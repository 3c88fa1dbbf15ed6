# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import pathlib
import runpy

project_dir = pathlib.Path(__file__).parents[1]

project = "bijective"
author = "bijective contributors"
release = runpy.run_path(str(project_dir / "bijective" / "__about__.py"))[
    "__version__"
]

extensions = [
    "myst_parser",
    "sphinx_copybutton",
]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

html_theme = "furo"
html_title = f"{project} Documentation"

# exclude prompts and output from copies
copybutton_exclude = ".linenos, .gp, .go"
