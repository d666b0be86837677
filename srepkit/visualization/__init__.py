from .srep_viewer import SrepViewer, srep_to_polydata
