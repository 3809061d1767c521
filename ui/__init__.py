# UI pages package
