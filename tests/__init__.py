#
# voice-skill-sdk
#
# (C) 2020, Magenta Hypercube, Deutsche Telekom AG
#
# This file is distributed under the terms of the MIT license.
# For details see the file LICENSE in the top directory.
#
#
import pathlib

from agus import l10n

# Load the skill translations independently of the working directory
LOCALE_DIR = pathlib.Path(__file__).resolve().parent.parent / 'locale'

l10n.set_catalog(l10n.load_catalog(str(LOCALE_DIR)))
