# The single interactive session's table controller, shared by the API and the HTML page
from eotracker.table import TableController

controller = TableController()
