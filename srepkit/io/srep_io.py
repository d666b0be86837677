"""
Read and write elliptical s-reps as a header xml file plus three vtp files
(up, down and crest spokes).

In every vtp file the points are the spoke base points and the point data hold
'spokeLength' (1 component) and 'spokeDirection' (3 components). Grid files
list nRows * nCols points in row-major order. The optional 'spokePresent'
integer array marks grid points that have no spoke on that side.
"""
import logging
import os
import xml.etree.ElementTree as ET

import numpy as np
import vtk

from srepkit import config
from srepkit.models.sreps.errors import InvalidArgument, InvalidState
from srepkit.models.sreps.spoke import Spoke
from srepkit.models.sreps.srep import Crest, CrestPoint, EllipticalSRep, SkeletalGrid, SkeletalPoint

logger = logging.getLogger(__name__)


def _resolve(header_folder, file_name):
    file_name = file_name.strip()
    path = file_name if os.path.isabs(file_name) else os.path.join(header_folder, file_name)
    if not os.path.isfile(path):
        ## files moved together with the header
        path = os.path.join(header_folder, file_name.replace('\\', '/').split('/')[-1])
    return path


def _read_polydata(file_name):
    if not os.path.isfile(file_name):
        raise FileNotFoundError("No such s-rep file: %s" % file_name)
    reader = vtk.vtkXMLPolyDataReader()
    reader.SetFileName(file_name)
    reader.Update()
    return reader.GetOutput()


def read_spokes(file_name):
    """Return a list of (base point, Spoke or None) stored in a vtp file."""
    polydata = _read_polydata(file_name)
    point_data = polydata.GetPointData()
    arr_length = point_data.GetArray('spokeLength')
    arr_dirs = point_data.GetArray('spokeDirection')
    if arr_length is None or arr_dirs is None:
        raise InvalidState("%s lacks the spokeLength/spokeDirection arrays" % file_name)
    arr_present = point_data.GetArray('spokePresent')

    ret_spokes = []
    for i in range(polydata.GetNumberOfPoints()):
        base_pt = np.array(polydata.GetPoint(i))
        if arr_present is not None and arr_present.GetValue(i) == 0:
            ret_spokes.append((base_pt, None))
            continue
        ret_spokes.append((base_pt, Spoke(arr_length.GetValue(i), arr_dirs.GetTuple3(i), base_pt)))
    return ret_spokes


def _header_file(header_folder, child, header_file_name):
    if child.text is None or not child.text.strip():
        raise InvalidState("Empty <%s> in s-rep header %s" % (child.tag, header_file_name))
    return _resolve(header_folder, child.text)


def _header_count(child, header_file_name):
    try:
        count = int((child.text or '').strip())
    except ValueError as e:
        raise InvalidState("Bad %s %r in s-rep header %s" % (child.tag, child.text, header_file_name)) from e
    if count < 2:
        raise InvalidState("%s must be at least 2 in s-rep header %s, got %d" % (child.tag, header_file_name, count))
    return count


def read_srep(header_file_name):
    """Parse a header xml file and the spoke files it names into an EllipticalSRep."""
    if not os.path.isfile(header_file_name):
        raise FileNotFoundError("No such s-rep header: %s" % header_file_name)
    try:
        tree = ET.parse(header_file_name)
    except ET.ParseError as e:
        raise InvalidState("Cannot parse s-rep header %s: %s" % (header_file_name, e)) from e

    header_folder = os.path.dirname(os.path.abspath(header_file_name))
    up_file_name = down_file_name = crest_file_name = None
    n_rows = n_cols = 0
    for child in tree.getroot():
        if child.tag == 'upSpoke':
            up_file_name = _header_file(header_folder, child, header_file_name)
        elif child.tag == 'downSpoke':
            down_file_name = _header_file(header_folder, child, header_file_name)
        elif child.tag == 'crestSpoke':
            crest_file_name = _header_file(header_folder, child, header_file_name)
        elif child.tag == 'nRows':
            n_rows = _header_count(child, header_file_name)
        elif child.tag == 'nCols':
            n_cols = _header_count(child, header_file_name)
    if None in (up_file_name, down_file_name, crest_file_name):
        raise InvalidState("Header %s must name upSpoke, downSpoke and crestSpoke files" % header_file_name)

    up_spokes = read_spokes(up_file_name)
    down_spokes = read_spokes(down_file_name)
    crest_spokes = read_spokes(crest_file_name)
    num_grid_pts = n_rows * n_cols
    if len(up_spokes) != num_grid_pts or len(down_spokes) != num_grid_pts:
        raise InvalidState("Expected %d x %d grid points, found %d up and %d down spokes"
                           % (n_rows, n_cols, len(up_spokes), len(down_spokes)))

    points = []
    for r in range(n_rows):
        row = []
        for c in range(n_cols):
            position, up_spoke = up_spokes[r * n_cols + c]
            down_spoke = down_spokes[r * n_cols + c][1]
            row.append(SkeletalPoint(position, up_spoke, down_spoke))
        points.append(row)

    crest_points = []
    for i, (position, spoke) in enumerate(crest_spokes):
        if spoke is None:
            raise InvalidState("Crest point %d in %s has no spoke" % (i, crest_file_name))
        crest_points.append(CrestPoint(position, spoke))

    srep = EllipticalSRep(SkeletalGrid(points), Crest(crest_points))
    srep.validate()
    logger.info("Read %r from %s", srep, header_file_name)
    return srep


def write_spokes(entries, file_name):
    """Write (base point, Spoke or None) pairs to a vtp file."""
    pts = vtk.vtkPoints()
    pts.SetDataTypeToDouble()
    arr_length = vtk.vtkDoubleArray()
    arr_length.SetNumberOfComponents(1)
    arr_length.SetName('spokeLength')
    arr_dirs = vtk.vtkDoubleArray()
    arr_dirs.SetNumberOfComponents(3)
    arr_dirs.SetName('spokeDirection')
    arr_present = vtk.vtkIntArray()
    arr_present.SetNumberOfComponents(1)
    arr_present.SetName('spokePresent')

    for base_pt, spoke in entries:
        pts.InsertNextPoint(base_pt)
        if spoke is None:
            arr_length.InsertNextValue(0.0)
            arr_dirs.InsertNextTuple((0.0, 0.0, 0.0))
            arr_present.InsertNextValue(0)
        else:
            arr_length.InsertNextValue(spoke.r)
            arr_dirs.InsertNextTuple(spoke.U)
            arr_present.InsertNextValue(1)

    polydata = vtk.vtkPolyData()
    polydata.SetPoints(pts)
    polydata.GetPointData().AddArray(arr_length)
    polydata.GetPointData().AddArray(arr_dirs)
    polydata.GetPointData().AddArray(arr_present)

    writer = vtk.vtkXMLPolyDataWriter()
    writer.SetFileName(file_name)
    writer.SetInputData(polydata)
    if writer.Write() != 1:
        raise IOError("Failed to write %s" % file_name)


def write_srep(srep, header_file_name, up_file_name, down_file_name, crest_file_name):
    """
    Write srep to a header file plus up, down and crest spoke files.
    The header refers to the spoke files relative to its own folder.
    """
    for name in (header_file_name, up_file_name, down_file_name, crest_file_name):
        if not name:
            raise InvalidArgument("All four output file names are required")
    srep.validate()

    grid = srep.grid
    write_spokes([(pt.position, pt.up_spoke) for pt in grid], up_file_name)
    write_spokes([(pt.position, pt.down_spoke) for pt in grid], down_file_name)
    write_spokes([(pt.position, pt.spoke) for pt in srep.crest], crest_file_name)

    header_folder = os.path.dirname(os.path.abspath(header_file_name))
    root = ET.Element('s-rep')
    ET.SubElement(root, 'nRows').text = str(grid.rows)
    ET.SubElement(root, 'nCols').text = str(grid.cols)
    ET.SubElement(root, 'meshType').text = 'Quad'
    for tag, file_name in (('upSpoke', up_file_name), ('downSpoke', down_file_name), ('crestSpoke', crest_file_name)):
        ET.SubElement(root, tag).text = os.path.relpath(os.path.abspath(file_name), header_folder)
    ET.ElementTree(root).write(header_file_name, encoding='utf-8', xml_declaration=True)
    logger.info("Wrote %r to %s", srep, header_file_name)
    return True


def export_srep(srep, directory, base_name):
    """Write srep into directory as <base_name>-header.xml and three <base_name>-*-spokes.vtp files."""
    if not directory:
        raise InvalidArgument("Export directory must not be empty")
    if not base_name:
        raise InvalidArgument("Export base name must not be empty")
    os.makedirs(directory, exist_ok=True)
    header_file_name = os.path.join(directory, base_name + config.HEADER_SUFFIX)
    write_srep(srep, header_file_name,
               os.path.join(directory, base_name + config.UP_SPOKES_SUFFIX),
               os.path.join(directory, base_name + config.DOWN_SPOKES_SUFFIX),
               os.path.join(directory, base_name + config.CREST_SPOKES_SUFFIX))
    return header_file_name
