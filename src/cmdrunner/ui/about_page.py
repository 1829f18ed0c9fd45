"""About view"""

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMessageBox, QWidget

from .. import __version__

ABOUT_HTML = f"""
<h3>CMD Runner v{__version__}</h3>
<p>A tray launcher for your frequently used shell commands.</p>
<p><b>Usage:</b></p>
<ul>
<li>Choose <i>Settings</i> in the tray menu to edit <code>settings.json</code></li>
<li>Each entry needs a <code>label</code> and a <code>command</code>;
    add a <code>group</code> to put it in a submenu</li>
<li>Set <code>general.darkTheme</code> to <code>true</code> for a light icon on dark taskbars</li>
<li>The menu reloads automatically when the file is saved</li>
</ul>
"""


def show_about_page(parent: Optional[QWidget] = None) -> QMessageBox:
    """Open the about box without blocking; closing it never quits the app"""
    box = QMessageBox(parent)
    box.setWindowTitle("About CMD Runner")
    box.setTextFormat(Qt.TextFormat.RichText)
    box.setText(ABOUT_HTML)
    box.setStandardButtons(QMessageBox.StandardButton.Close)
    box.setWindowModality(Qt.WindowModality.NonModal)
    box.setAttribute(Qt.WidgetAttribute.WA_DeleteOnClose)
    box.show()
    return box
