"""
ResumeCraft - Resume builder with AI-assisted mock interviews

Backend service for the dashboard, CSRF/session handling, interview
question recommendation and the video-processing worker.
"""

__version__ = "0.1.0"
__author__ = "ResumeCraft Team"
