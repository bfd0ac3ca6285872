"""Fixed names shared by the generator and the writer.

The generated unit is deliberately free of timestamps so repeated builds over
unchanged resources are byte-identical.
"""

# Package the umbrella unit is written to, relative to the output directory
PACKAGE_NAME = "mezzanine_generated"
MODULE_NAME = "mezzanine"

# Top-level type holding every embedded resource
UMBRELLA_TYPE_NAME = "Mezzanine"

GENERATED_HEADER = "# Generated by Mezzanine. Do not edit."
UMBRELLA_DOCSTRING = "Text resources embedded at build time."

INDENT = "    "
