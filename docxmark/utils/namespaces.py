class Namespaces:
    """A container for WordprocessingML namespaces and their maps for lxml."""
    # Namespace URIs
    W = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
    R = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
    A = "http://schemas.openxmlformats.org/drawingml/2006/main"
    WP = "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"
    PIC = "http://schemas.openxmlformats.org/drawingml/2006/picture"
    PKG_REL = "http://schemas.openxmlformats.org/package/2006/relationships"

    # Namespace Maps
    W_MAP = {'w': W, 'r': R}
    A_MAP = {'a': A}
