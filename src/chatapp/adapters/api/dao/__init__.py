from .common import CommonHTTPClient
from .cloudinary import CloudinaryHTTPDAO
