from sqldao.dao.args import DaoArgs, DaoArgsFactory
from sqldao.dao.fields import FieldMap
from sqldao.dao.sqlite_dao import SqliteDao
from sqldao.dao.value_object import ValueObject

__all__ = ["DaoArgs", "DaoArgsFactory", "FieldMap", "SqliteDao", "ValueObject"]
