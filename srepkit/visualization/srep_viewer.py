import pyvista as pv
import vtk

SPOKE_TYPES = {'up': 0, 'down': 1, 'crest': 2}
SPOKE_COLORS = {'up': 'red', 'down': 'cornflowerblue', 'crest': 'orange'}


def srep_to_polydata(srep, kinds=('up', 'down', 'crest')):
    """All spokes of srep as line cells; the cell array 'spokeType' holds 0 (up), 1 (down) or 2 (crest)."""
    spoke_pts = vtk.vtkPoints()
    spoke_pts.SetDataTypeToDouble()
    spoke_lines = vtk.vtkCellArray()
    spoke_types = vtk.vtkIntArray()
    spoke_types.SetName('spokeType')
    for kind, spoke in srep.spokes():
        if kind not in kinds:
            continue
        arrow = vtk.vtkLine()
        arrow.GetPointIds().SetId(0, spoke_pts.InsertNextPoint(spoke.p))
        arrow.GetPointIds().SetId(1, spoke_pts.InsertNextPoint(spoke.getB()))
        spoke_lines.InsertNextCell(arrow)
        spoke_types.InsertNextValue(SPOKE_TYPES[kind])

    srep_poly = vtk.vtkPolyData()
    srep_poly.SetPoints(spoke_pts)
    srep_poly.SetLines(spoke_lines)
    srep_poly.GetCellData().AddArray(spoke_types)
    return srep_poly


class SrepViewer:
    def __init__(self, line_width=3):
        self.line_width = line_width

    def add_srep(self, plt, srep, opacity=1.0):
        for kind, color in SPOKE_COLORS.items():
            spokes = srep_to_polydata(srep, kinds=(kind,))
            if spokes.GetNumberOfCells() == 0:
                continue
            plt.add_mesh(spokes, color=color, line_width=self.line_width, opacity=opacity, label=kind)
        skeleton = pv.PolyData(srep.grid.positions().reshape(-1, 3))
        plt.add_mesh(skeleton, color='white', point_size=6, opacity=opacity)

    def show(self, srep, mesh=None, title='', opacity=1.0):
        plt = pv.Plotter()
        if mesh is not None:
            plt.add_mesh(mesh, color='white', opacity=0.2)
        self.add_srep(plt, srep, opacity)
        plt.add_title(title, color='grey')
        plt.add_legend()
        plt.show()

    def show_node(self, node, mesh=None):
        """Show a scene node honouring its visibility and opacity."""
        if not node.display.visibility:
            return
        self.show(node.srep, mesh, title=node.name, opacity=node.display.opacity)
