"""
The MODEL layer contains the vector value types and their numeric helpers.
It has NO knowledge of the expression parser or evaluator that consumes them.
"""
