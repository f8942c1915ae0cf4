"""
sim/samples.py
==============
The small worked example from the contest statement (dataset ``a``) and a
submission for it scoring 1,002 points.  Used by the test-suite and handy
for trying the API by hand.
"""

EXAMPLE_DATASET = """\
6 4 5 2 1000
2 0 rue-de-londres 1
0 1 rue-d-amsterdam 1
3 1 rue-d-athenes 1
2 3 rue-de-rome 2
1 2 rue-de-moscou 3
4 rue-de-londres rue-d-amsterdam rue-de-moscou rue-de-rome
3 rue-d-athenes rue-de-moscou rue-de-londres
"""

EXAMPLE_SUBMISSION = """\
3
1
2
rue-d-athenes 2
rue-d-amsterdam 1
0
1
rue-de-londres 2
2
1
rue-de-moscou 1
"""

EXAMPLE_SCORE = 1002
