"""
Configuration module.

Default parameters, YAML loading with precedence and validation.
"""
