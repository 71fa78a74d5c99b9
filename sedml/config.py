# sedml/config.py
"""Configuration settings for the sedml object model."""

import os


class Config:
    def __init__(self):
        # Schema revision used when an element is built without level/version
        self.DEFAULT_LEVEL = int(os.environ.get("SEDML_DEFAULT_LEVEL", 1))
        self.DEFAULT_VERSION = int(os.environ.get("SEDML_DEFAULT_VERSION", 1))

        # Serialization
        self.PRETTY_PRINT = os.environ.get("SEDML_PRETTY_PRINT", "1") == "1"
        self.XML_DECLARATION = os.environ.get("SEDML_XML_DECLARATION", "1") == "1"
