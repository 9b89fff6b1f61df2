from models.users import User
from models.kandang import Kandang
from models.inventory import Inventory, InventoryStatus
from models.inventory_image import InventoryImage
from models.log_inventory import LogInventory

__all__ = ['Inventory', 'InventoryImage', 'InventoryStatus', 'Kandang', 'LogInventory', 'User',]
