"""Document tree assembly and publishing pipeline."""
