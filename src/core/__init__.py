"""Core domain package for telemirror.

Core contains tagging, duplicate detection, media transfer and forwarding
logic without any Telethon-specific code, keeping the pipeline testable with
plain fakes.
"""
