"""
Configuration for Imposter Party, read from the environment.
"""
