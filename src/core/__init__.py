"""Core domain package for chatfilter.

Core contains settings resolution, matching, and the moderation pipeline
without any store- or transport-specific code, keeping the business logic
portable.
"""
