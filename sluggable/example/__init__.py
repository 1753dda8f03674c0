"""Example application built on the sluggable mixin."""
