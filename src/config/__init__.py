"""
Configuration for ResumeCraft
"""
