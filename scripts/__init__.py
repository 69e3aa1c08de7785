"""Deployment entry points"""
