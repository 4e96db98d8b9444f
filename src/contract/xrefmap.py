"""Xref map file contract.

Filenames, header line and default documentation URLs shared by the
serializer, the validator and the CLI.
"""

from __future__ import annotations

# https://github.com/dotnet/docfx/blob/main/src/Docfx.Build/XRefMaps/XRefArchive.cs
XREFMAP_FILENAME = "xrefmap.yml"

# First line of every xref map document.
YAML_MIME_HEADER = "### YamlMime:XRefMap"

CONFIG_FILENAME = "xrefmaps.toml"

# ``{0}`` is replaced with the short editor version, e.g. ``6000.0``.
DEFAULT_UNITY_API_URL = "https://docs.unity3d.com/{0}/Documentation/ScriptReference/"

DEFAULT_PACKAGE_REGEX = r"https://docs.unity3d.com/Packages/"

DEFAULT_LINK_TIMEOUT = 10.0
