"""Shared kernel: domain building blocks, ports, event pipeline, CQRS plumbing."""
