"""
CLI Module — click commands for the bootstrap and commit tools.
"""
