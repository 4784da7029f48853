"""Metadata extraction pipeline for scientific PDF documents."""

from docpipeline.pipeline import run_pipeline

__all__ = ["run_pipeline"]
