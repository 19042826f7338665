"""Command groups"""
