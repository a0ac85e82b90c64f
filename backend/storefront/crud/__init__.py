from . import crud_admin as admin
from . import crud_category as category
from . import crud_artist as artist
from . import crud_artwork as artwork
from . import crud_order as order
from . import crud_feedback as feedback
from . import crud_dashboard as dashboard
