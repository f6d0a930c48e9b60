#!/usr/bin/env python3
#
#   polymoly : exact arithmetic on univariate polynomials over abstract rings
#
