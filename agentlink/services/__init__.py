"""Thin wrappers over the GitHub and Slack SDKs"""
