"""Shared data types"""
