# medcoord — координация медицинских ресурсов (запасы, заявки, оповещения)
