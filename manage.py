#!/usr/bin/env python
from agus.manage import manage


manage()
