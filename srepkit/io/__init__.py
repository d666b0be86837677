from .srep_io import read_srep, write_srep, export_srep
