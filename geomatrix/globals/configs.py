
#---------------------
# GEOTRANSFORM
#---------------------
GEOTRANSFORM_SIZE = 6
SINGULAR_DET_EPSILON = 1e-10


#---------------------
# QML REGISTRATION
#---------------------
QML_IMPORT_NAME = "GeoMatrix"
QML_IMPORT_MAJOR_VERSION = 1
QML_IMPORT_MINOR_VERSION = 0
QML_SINGLETON_NAME = "GeoTransform"

#---------------------
# CONFIGURATION FILES
#---------------------
GEOTRANSFORM_CONFIGS_FILENAME = 'geotransform.yml'

#--------------------
# Log File Names
#--------------------
LOG_FILE_PREFIX = "geomatrix"
