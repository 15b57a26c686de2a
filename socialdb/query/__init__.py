"""
Logic to turn the option mappings used to look up entities into Storm
expressions.
"""
