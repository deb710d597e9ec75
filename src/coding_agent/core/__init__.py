"""
Agent core: tools, prompt, model client and the dispatch loop.
"""
